import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class Sex(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class PriceOption(BaseModel):
    """One price tier of a catalog test. An empty variant means the test has a single tier."""
    model_config = ConfigDict(frozen=True)

    variant: str = Field(default="", description="Tier label such as Standard or Premium")
    price: int = Field(ge=0, description="Price in whole rupees")


class CatalogEntry(BaseModel):
    """A diagnostic test offered by the laboratory."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Unique test name")
    category: str = Field(description="Grouping label used for filtering")
    prices: tuple[PriceOption, ...] = Field(min_length=1)

    @model_validator(mode="after")
    def _prices_are_unique(self) -> "CatalogEntry":
        seen: set[int] = set()
        for option in self.prices:
            if option.price in seen:
                raise ValueError(f"Test {self.name!r} lists price {option.price} more than once")
            seen.add(option.price)
        return self

    def option_for(self, price: int) -> PriceOption | None:
        for option in self.prices:
            if option.price == price:
                return option
        return None


class LineItem(BaseModel):
    """A priced test selection on a bill."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    price: int = Field(ge=0)
    variant: str = ""


class BillingDraft(BaseModel):
    """In-progress record edited by the billing form. Values are stored as entered."""

    name: str = ""
    age: str = ""
    sex: Sex | str = ""
    date: datetime.date | str = Field(default_factory=datetime.date.today)
    referred_doctors: list[str] = Field(default_factory=list)
    selected_tests: list[LineItem] = Field(default_factory=list)


class PatientRecord(BaseModel):
    """Finalized billing record handed from the billing form to the report.

    Serialized with camelCase keys (``referredDoctors``, ``selectedTests``).
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    name: str = Field(min_length=1)
    age: str = Field(pattern=r"^\d+$")
    sex: Sex
    date: datetime.date
    referred_doctors: tuple[str, ...] = Field(min_length=1)
    selected_tests: tuple[LineItem, ...] = Field(min_length=1)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)
