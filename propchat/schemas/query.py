# propchat/schemas/query.py
"""
Store-facing query shapes.

A CompiledQuery is a small predicate tree: Condition leaves joined by
"and"/"or" Groups. It is plain data, so two queries built from equal
FilterRecords compare equal and can be dumped straight into a response.
The repository is the only place that turns it into SQL.
"""
from typing import Literal, Tuple, Union

from pydantic import BaseModel

Operator = Literal["icontains", "eq", "gte", "lte", "all_icontains"]
Value = Union[int, float, str, Tuple[str, ...]]


class Condition(BaseModel):
    field: str
    op: Operator
    value: Value

    model_config = {"frozen": True}


class Group(BaseModel):
    mode: Literal["and", "or"] = "and"
    clauses: Tuple[Union[Condition, "Group"], ...] = ()

    model_config = {"frozen": True}


Group.model_rebuild()


class CompiledQuery(BaseModel):
    where: Group = Group()

    model_config = {"frozen": True}

    def is_unconstrained(self) -> bool:
        return not self.where.clauses


class SortKey(BaseModel):
    field: Literal["min_price", "area_sqft", "status"]
    direction: Literal["asc", "desc"] = "asc"

    model_config = {"frozen": True}


SortSpec = Tuple[SortKey, ...]
