"""Registrations API — list, register and unregister nodes per user."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request
from fastapi.responses import JSONResponse
from pydantic import AfterValidator, AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from registrar.engine.registry import Registry

router = APIRouter(prefix="/registrations", tags=["registrations"])

_url_adapter = TypeAdapter(AnyUrl)


def _check_url(value: str) -> str:
    """Reject malformed URLs but keep the submitted string as-is."""
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        raise ValueError(f"'{value}' is not a well-formed URL") from None
    return value


class UserRegistration(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # node ids form the last path segment of the delete route
    node_id: str = Field(alias="nodeId", min_length=1, pattern=r"^[^/]+$")
    url: Annotated[str, AfterValidator(_check_url)]


def get_registry(request: Request) -> Registry:
    """Return the registry owned by the running application."""
    return request.app.state.registry


RegistryDep = Annotated[Registry, Depends(get_registry)]

# User names may contain "/", so they are matched with the path converter.
UserName = Annotated[str, Path(min_length=1)]


@router.get("")
def list_users(registry: RegistryDep):
    """List user names that currently own at least one node."""
    return {"users": registry.users()}


@router.get("/{user_name:path}")
def get_registrations(user_name: UserName, registry: RegistryDep):
    """List a user's nodes. Unknown users get 404 with an empty list."""
    entries = registry.list(user_name)
    if not entries:
        return JSONResponse(status_code=404, content=[])
    return [{"nodeId": e.node_id, "url": e.url} for e in entries]


@router.post("/{user_name:path}")
def register(user_name: UserName, body: UserRegistration, registry: RegistryDep):
    """Register a node for a user, or update the url of an existing one."""
    registry.upsert(user_name, body.node_id, body.url)
    return {"status": "registered", "userName": user_name, "nodeId": body.node_id}


@router.delete("/{user_name:path}/{node_id}")
def unregister(user_name: UserName, node_id: str, registry: RegistryDep):
    """Remove a node registration. Unknown users or nodes are not an error."""
    registry.delete(user_name, node_id)
    return {"status": "unregistered", "userName": user_name, "nodeId": node_id}
