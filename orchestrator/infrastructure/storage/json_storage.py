"""JSON file storage with Result-based error handling.

Provides a thin wrapper around whole-document file I/O, returning
Result types whose errors are typed OrchestratorError instances so
repositories can tell a missing document from a malformed one.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from orchestrator.domain.shared.errors import (
    NotFoundError,
    OrchestratorError,
    StorageError,
    ValidationError,
)
from orchestrator.domain.shared.result import Err, Ok, Result

logger = logging.getLogger(__name__)


class JsonStorage:
    """Low-level JSON document I/O.

    Writes are atomic: the document goes to a temp file in the target
    directory and is renamed over the destination, so readers never see
    a partial document. No domain logic lives here.

    Example:
        storage = JsonStorage()
        result = storage.load_json(Path("project.json"))
        if isinstance(result, Ok):
            data = result.value
        else:
            raise result.error
    """

    def load_json(self, path: Path) -> Result[dict[str, Any], OrchestratorError]:
        """Load a JSON object from a file.

        Args:
            path: Path to the JSON file to read.

        Returns:
            Ok(dict) if successful; Err(NotFoundError) if the file is
            missing, Err(ValidationError) if it is not a JSON object,
            Err(StorageError) on other I/O failures.
        """
        try:
            if not path.exists():
                return Err(NotFoundError(f"File not found: {path}"))

            data = json.loads(path.read_text(encoding="utf-8"))

        except json.JSONDecodeError as e:
            return Err(ValidationError(f"Invalid JSON in {path}: {e}"))
        except UnicodeDecodeError as e:
            return Err(ValidationError(f"Invalid UTF-8 in {path}: {e}"))
        except PermissionError:
            return Err(StorageError(f"Permission denied reading {path}"))
        except OSError as e:
            return Err(StorageError(f"Error reading {path}: {e}"))

        if not isinstance(data, dict):
            return Err(ValidationError(f"Expected a JSON object in {path}"))
        return Ok(data)

    def save_json(
        self,
        path: Path,
        data: dict[str, Any],
        indent: int = 2,
    ) -> Result[None, OrchestratorError]:
        """Atomically write a JSON object to a file.

        Args:
            path: Destination path; parent directories are created.
            data: Dictionary to serialize as JSON.
            indent: JSON indentation level (default 2).

        Returns:
            Ok(None) if successful, Err(StorageError) otherwise.
        """
        try:
            content = json.dumps(data, indent=indent)
        except (TypeError, ValueError) as e:
            return Err(StorageError(f"Data not JSON serializable: {e}"))

        tmp: str | None = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, path)
            tmp = None
        except PermissionError:
            return Err(StorageError(f"Permission denied writing {path}"))
        except OSError as e:
            return Err(StorageError(f"Error writing {path}: {e}"))
        finally:
            if tmp is not None:
                Path(tmp).unlink(missing_ok=True)

        logger.debug(f"Wrote {path}")
        return Ok(None)
