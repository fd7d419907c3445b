import uuid
from typing import Mapping, Type, TypeVar

from pydantic import BaseModel, ValidationError

from app.core.exceptions import bad_request

SchemaType = TypeVar("SchemaType", bound=BaseModel)


def parse_id(params: Mapping[str, str], name: str = "id") -> str:
    """Validate a UUID path parameter, returning its canonical string form"""
    raw = params.get(name, "")
    try:
        return str(uuid.UUID(raw))
    except ValueError:
        raise bad_request(f"invalid {name}: {raw!r}")


def parse_body(schema: Type[SchemaType], body: bytes) -> SchemaType:
    """Decode a JSON request body into the given input schema"""
    try:
        return schema.model_validate_json(body)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'body'}: {err['msg']}"
            for err in e.errors()
        )
        raise bad_request(f"invalid request body: {problems}")
