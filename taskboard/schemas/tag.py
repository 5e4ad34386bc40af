from pydantic import BaseModel
from typing import List


class TagList(BaseModel):
    items: List[str]
