"""Location queries accepted by the current weather endpoint."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class _QueryBase(BaseModel):
    """Common behaviour of the query variants."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    param: ClassVar[str]

    @property
    def value(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return f"{self.param}={self.value}"


class City(_QueryBase):
    """Free-text city name, e.g. ``London`` or ``London,uk``."""

    param: ClassVar[str] = "q"

    name: str = Field(min_length=1)

    @property
    def value(self) -> str:
        return self.name


class PostalCode(_QueryBase):
    """Postal code, optionally with a country suffix (``94040,us``)."""

    param: ClassVar[str] = "zip"

    code: str = Field(min_length=1)

    @property
    def value(self) -> str:
        return self.code


class LocationId(_QueryBase):
    """Provider-specific numeric city id."""

    param: ClassVar[str] = "id"

    id: str = Field(min_length=1)

    @property
    def value(self) -> str:
        return self.id


Query = City | PostalCode | LocationId
