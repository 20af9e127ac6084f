from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class CollectionType(str, Enum):
    manual = "manual"
    automated = "automated"


class PriceRange(BaseModel):
    min: Optional[float] = None
    max: Optional[float] = None

    model_config = ConfigDict(extra="ignore")

    def contains(self, price: float) -> bool:
        if self.min is not None and price < self.min:
            return False
        if self.max is not None and price > self.max:
            return False
        return True


class CollectionConditions(BaseModel):
    categories: Optional[List[int]] = None
    is_available: Optional[bool] = Field(default=None, alias="isAvailable")
    price_range: Optional[PriceRange] = Field(default=None, alias="priceRange")
    featured: Optional[bool] = None

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Collection(BaseModel):
    id: Union[str, int, None] = Field(default=None, alias="_id")
    name: Union[str, dict[str, Any], None] = None
    type: Optional[str] = None
    is_active: Optional[bool] = Field(default=None, alias="isActive")
    featured: Optional[bool] = None
    products: Optional[List[int]] = None
    conditions: Optional[CollectionConditions] = None

    model_config = ConfigDict(extra="allow", populate_by_name=True)


__all__ = ["CollectionType", "PriceRange", "CollectionConditions", "Collection"]
