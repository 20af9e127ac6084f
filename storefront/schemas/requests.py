from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _Body(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class CartAddRequest(_Body):
    product_id: Optional[int] = Field(default=None, alias="productId")
    quantity: Optional[int] = None
    selected_options: Dict[str, Any] = Field(default_factory=dict, alias="selectedOptions")
    options_pricing: Dict[str, Any] = Field(default_factory=dict, alias="optionsPricing")
    product_options: List[Any] = Field(default_factory=list, alias="productOptions")
    product_options_price_modifier: float = Field(default=0, alias="productOptionsPriceModifier")
    attachments: Dict[str, Any] = Field(default_factory=dict)
    add_ons: List[Any] = Field(default_factory=list, alias="addOns")
    total_price: Optional[float] = Field(default=None, alias="totalPrice")
    base_price: Optional[float] = Field(default=None, alias="basePrice")
    add_ons_price: Optional[float] = Field(default=None, alias="addOnsPrice")
    product_name: Optional[str] = Field(default=None, alias="productName")
    price: Optional[float] = None
    image: Optional[str] = None


class CartQuantityUpdate(_Body):
    quantity: Optional[int] = None


class CartOptionsUpdate(_Body):
    item_id: Optional[int] = Field(default=None, alias="itemId")
    selected_options: Optional[Dict[str, Any]] = Field(default=None, alias="selectedOptions")
    options_pricing: Optional[Dict[str, Any]] = Field(default=None, alias="optionsPricing")
    product_options: Optional[List[Any]] = Field(default=None, alias="productOptions")
    product_options_price_modifier: Optional[float] = Field(default=None, alias="productOptionsPriceModifier")


class WishlistAddRequest(_Body):
    product_id: Optional[int] = Field(default=None, alias="productId")


class CommentCreate(_Body):
    product_id: Optional[int] = Field(default=None, alias="productId")
    user_id: Optional[Union[int, str]] = Field(default=None, alias="userId")
    user_name: Optional[str] = Field(default=None, alias="userName")
    user_email: Optional[str] = Field(default=None, alias="userEmail")
    content: Optional[str] = None
    rating: Optional[float] = None


class StaticPageCreate(_Body):
    title: Optional[str] = None
    slug: Optional[str] = None
    content: Optional[str] = None
    meta_description: Optional[str] = Field(default=None, alias="metaDescription")
    is_active: Optional[bool] = Field(default=None, alias="isActive")
    show_in_footer: Optional[bool] = Field(default=None, alias="showInFooter")
    image_url: Optional[str] = Field(default=None, alias="imageUrl")


class CouponValidateRequest(_Body):
    code: str = ""
    total_amount: float = Field(default=0, alias="totalAmount")


__all__ = [
    "CartAddRequest",
    "CartQuantityUpdate",
    "CartOptionsUpdate",
    "WishlistAddRequest",
    "CommentCreate",
    "StaticPageCreate",
    "CouponValidateRequest",
]
