"""
Storefront API Pydantic Models

Request bodies shared by the routers.
"""
from typing import Union

from pydantic import BaseModel


class CartProductRequest(BaseModel):
    product_id: Union[int, str]
