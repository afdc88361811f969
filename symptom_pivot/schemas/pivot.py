from typing import Dict, List

from pydantic import BaseModel, Field, StrictInt


class PivotResponse(BaseModel):
    rows: List[str]
    columns: List[str]
    data: Dict[str, Dict[str, StrictInt]]
    max_value: StrictInt = Field(alias="maxValue", ge=1)

    class Config:
        populate_by_name = True
