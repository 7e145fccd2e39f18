from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: float = Field(..., ge=0, description="Prix en unité majeure (ex: 69.0 GBP)")
    file: Optional[str] = Field(None, description="Nom du fichier livrable dans DOWNLOADS_DIR")

    @property
    def unit_amount(self) -> int:
        """Prix en unité mineure (centimes/pence) pour Stripe."""
        return int(round(self.price * 100))


class Bundle(Product):
    items: List[str] = Field(default_factory=list, description="IDs des produits inclus, dans l'ordre")
