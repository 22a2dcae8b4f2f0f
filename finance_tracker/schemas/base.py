from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

# En JSON el dinero viaja como número, no como string
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

# Lo que entra tiene que caber en NUMERIC(14, 2), si no la BD lo redondea
MoneyInput = Annotated[Money, Field(max_digits=14, decimal_places=2)]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
