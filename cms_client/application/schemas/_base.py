from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for payloads exchanged with the API and the snapshot stores (camelCase on the wire)."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "coerce_numbers_to_str": True,
    }
