"""Base model for persisted documents.

State documents are read by hooks and tools outside this package, so
they keep camelCase keys on disk while Python code uses snake_case.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DocumentModel(BaseModel):
    """Pydantic base that maps snake_case attributes to camelCase keys.

    Input accepts either spelling. Serialize with ``by_alias=True`` to
    produce the on-disk shape.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
