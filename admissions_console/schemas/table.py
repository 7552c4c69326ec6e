from pydantic import BaseModel
from typing import List, Literal, Optional

ColumnType = Literal["text", "number", "boolean", "badge", "date", "array", "color"]
SortDirection = Literal["asc", "desc"]


class ColumnDescriptor(BaseModel):
    key: str
    label: str
    type: ColumnType = "text"
    sortable: bool = False
    filterable: bool = False
    width: Optional[str] = None

    model_config = {"frozen": True}


class RenderedCell(BaseModel):
    # toggle, badge, date, chips, color, number, text, placeholder
    kind: str
    text: str
    checked: Optional[bool] = None
    badge_variant: Optional[str] = None
    chips: List[str] = []
    overflow: Optional[str] = None
    swatch: Optional[str] = None


class TableHeader(BaseModel):
    key: str
    label: str
    type: ColumnType
    sortable: bool
    filterable: bool
    width: Optional[str] = None
    sort_direction: Optional[SortDirection] = None


class TableRow(BaseModel):
    key: str
    cells: List[RenderedCell]
    actions: List[str] = []


class TableView(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    headers: List[TableHeader]
    rows: List[TableRow]
    has_actions_column: bool
    show_search: bool
    show_add_button: bool
    search_placeholder: str
    search: str = ""
    loading: bool = False
    empty_message: Optional[str] = None
    total_count: int
    visible_count: int
