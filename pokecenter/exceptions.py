from fastapi import HTTPException


class PokemonNotFoundError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=404, detail=detail)


class StoreConflictError(Exception):
    """Raised when an insert loses a race against another insert of the same external id."""

    def __init__(self, external_id: int):
        super().__init__(f"Pokemon with external id {external_id} already stored")
        self.external_id = external_id


class StoreUnavailableError(Exception):
    """Raised when a persist-mode call is made without a configured store."""
