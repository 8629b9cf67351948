from dataclasses import dataclass, field
from typing import Dict, List, Optional

NO_CHANGE = "no-change"
CUSTOM = "custom"
DESCRIPTION_ITEM = "description"

# Fixed per-product denominator: 3 SEO recs + 4 GEO recs + 1 description
DEFAULT_ACTIONABLE_ITEMS = 8

DESCRIPTION_KEYS = ["seoPrioritized", "geoPrioritized", "balanced"]


def todo_tag(kind: str, index: int) -> str:
    return f"{kind}-{index}"


@dataclass
class SEOAudit:
    strengths: Dict[str, str] = field(default_factory=dict)
    issues: Dict[str, str] = field(default_factory=dict)
    recommendations: List[str] = field(default_factory=list)

@dataclass
class GEOAudit:
    strengths: Dict[str, str] = field(default_factory=dict)
    gaps: Dict[str, str] = field(default_factory=dict)
    recommendations: List[str] = field(default_factory=list)

@dataclass
class DescriptionOptions:
    seo_prioritized: str = ""
    geo_prioritized: str = ""
    balanced: str = ""

    def as_choices(self) -> Dict[str, str]:
        return {
            "seoPrioritized": self.seo_prioritized,
            "geoPrioritized": self.geo_prioritized,
            "balanced": self.balanced,
        }

@dataclass
class ProductAuditRecord:
    id: str
    title: str
    url: str = ""
    original_description: str = ""
    seo: SEOAudit = field(default_factory=SEOAudit)
    geo: GEOAudit = field(default_factory=GEOAudit)
    description_options: DescriptionOptions = field(default_factory=DescriptionOptions)

@dataclass
class SelectionState:
    selected_description: Optional[str] = None
    custom_description_text: Optional[str] = None
    show_custom_input: bool = False
    completed_items: List[str] = field(default_factory=list)   # insertion-ordered, unique
    selected_todos: List[str] = field(default_factory=list)    # insertion-ordered, unique

@dataclass
class ProductSelection:
    id: str
    title: str
    selected_description: str = NO_CHANGE
    custom_description: Optional[str] = None
    completed_items: List[str] = field(default_factory=list)
    todos: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        out: Dict[str, object] = {
            "id": self.id,
            "title": self.title,
            "selectedDescription": self.selected_description,
        }
        if self.custom_description is not None:
            out["customDescription"] = self.custom_description
        out["completedItems"] = list(self.completed_items)
        out["todos"] = list(self.todos)
        return out

@dataclass
class SubmissionPayload:
    products: List[ProductSelection] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {"products": [p.to_dict() for p in self.products]}

@dataclass
class ReportSummary:
    products_analyzed: int
    descriptions_selected: int
    todos_created: int
    items_selected: int
