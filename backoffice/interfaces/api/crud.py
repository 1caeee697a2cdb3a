"""The five CRUD routes every entity family exposes."""

from typing import Any, Callable, Sequence

from fastapi import APIRouter, Depends, status

from backoffice.application.services.entity_service import EntityService
from backoffice.application.services.families import EntityFamily
from backoffice.interfaces.api.payload import RequestPayload, read_payload


def build_crud_router(
    family: EntityFamily,
    get_service: Callable[..., EntityService],
    write_dependencies: Sequence[Any] = (),
) -> APIRouter:
    """create, list, get, update, delete for one family.

    ``write_dependencies`` guard the three mutating routes only.
    """
    router = APIRouter()
    read_schema = family.read_schema
    key = family.name
    guards = list(write_dependencies)

    @router.post("/create", status_code=status.HTTP_201_CREATED, dependencies=guards)
    def create_entity(
        payload: RequestPayload = Depends(read_payload),
        service: EntityService = Depends(get_service),
    ):
        record = service.create(payload.data, payload.image)
        return {
            "message": f"{family.label} created successfully",
            key: read_schema.model_validate(record),
        }

    @router.get("/")
    def list_entities(service: EntityService = Depends(get_service)):
        return [read_schema.model_validate(record) for record in service.list()]

    @router.get("/{entity_id}")
    def get_entity(entity_id: str, service: EntityService = Depends(get_service)):
        return read_schema.model_validate(service.get(entity_id))

    @router.put("/update/{entity_id}", dependencies=guards)
    def update_entity(
        entity_id: str,
        payload: RequestPayload = Depends(read_payload),
        service: EntityService = Depends(get_service),
    ):
        record = service.update(entity_id, payload.data, payload.image)
        return {
            "message": f"{family.label} updated successfully",
            key: read_schema.model_validate(record),
        }

    @router.delete("/delete/{entity_id}", dependencies=guards)
    def delete_entity(entity_id: str, service: EntityService = Depends(get_service)):
        service.delete(entity_id)
        return {"message": f"{family.label} deleted successfully"}

    return router
