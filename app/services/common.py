from app.core.errors import ConcurrentModificationError, NotFoundError


def ensure_version(entity, expected: int | None, label: str) -> None:
    """Control optimista pedido por el cliente: si manda `version`, tiene que ser la actual."""
    if expected is not None and expected != entity.version:
        raise ConcurrentModificationError(
            f"{label} {entity.id} has version {entity.version}, request was based on version {expected}"
        )


async def ensure_exists(repo, id: int) -> None:
    if not await repo.exists_active(id):
        raise NotFoundError(f"{repo.label} not found with ID: {id}")
