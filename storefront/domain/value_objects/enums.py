from enum import Enum


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class ProductSort(str, Enum):
    """Sort tokens accepted by the product listing.

    Any token not listed here falls back to :attr:`NAME`.
    """

    NAME = "name"
    PRICE_ASC = "priceAsc"
    PRICE_DESC = "priceDesc"

    @classmethod
    def parse(cls, token: str | None) -> "ProductSort":
        for member in cls:
            if member.value == token:
                return member
        return cls.NAME
