from typing import Dict, List, Optional

from .models import CUSTOM, DESCRIPTION_ITEM, NO_CHANGE, ProductAuditRecord, SubmissionPayload, todo_tag
from .tracker import SelectionTracker

OPTION_LABELS = {
    NO_CHANGE: "Keep original",
    "seoPrioritized": "SEO-prioritized",
    "geoPrioritized": "GEO-prioritized",
    "balanced": "Balanced (recommended)",
    CUSTOM: "Custom",
}

def _blockquote(text):
    if not text:
        return ">\n"
    return "> " + text.replace("\n", "\n> ") + "\n"

def _labelled(lines: List[str], title: str, items: Dict[str, str]):
    lines.append(f"#### {title}")
    if not items:
        lines.append("_None._")
    for label, text in items.items():
        lines.append(f"- **{label}:** {text}")
    lines.append("")

def _checklist(lines: List[str], kind: str, recs: List[str], product_id: str,
               tracker: Optional[SelectionTracker]):
    lines.append("#### Recommendations")
    if not recs:
        lines.append("_None._")
    for idx, rec in enumerate(recs):
        tag = todo_tag(kind, idx)
        mark = "x" if tracker and tracker.is_todo_selected(product_id, tag) else " "
        lines.append(f"- [{mark}] `{tag}` {rec}")
    lines.append("")


def render_product(product: ProductAuditRecord, tracker: Optional[SelectionTracker] = None) -> str:
    lines = []
    lines.append(f"## {product.title} ({product.id})")
    if product.url:
        lines.append(f"<{product.url}>")
    if tracker is not None:
        done = tracker.completed_count(product.id)
        total = tracker.total_actionable_items(product.id)
        lines.append(f"**Progress:** {done}/{total} items")
    lines.append("")
    lines.append("### Original Description")
    lines.append(_blockquote(product.original_description))

    lines.append("### SEO Analysis")
    _labelled(lines, "Strengths", product.seo.strengths)
    _labelled(lines, "Issues", product.seo.issues)
    _checklist(lines, "seo", product.seo.recommendations, product.id, tracker)

    lines.append("### GEO Analysis")
    _labelled(lines, "Strengths", product.geo.strengths)
    _labelled(lines, "Gaps", product.geo.gaps)
    _checklist(lines, "geo", product.geo.recommendations, product.id, tracker)

    chosen = tracker.description_choice_key(product.id) if tracker else None
    finalized = bool(tracker and tracker.is_completed(product.id, DESCRIPTION_ITEM))
    lines.append("### Description Options" + (" (finalized)" if finalized else ""))
    options = {NO_CHANGE: product.original_description, **product.description_options.as_choices()}
    for key, text in options.items():
        marker = "(•)" if chosen == key else "( )"
        lines.append(f"**{marker} {OPTION_LABELS[key]}**")
        lines.append(_blockquote(text))
    if chosen == CUSTOM:
        lines.append(f"**(•) {OPTION_LABELS[CUSTOM]}**")
        lines.append(_blockquote(tracker.custom_description_text(product.id) or ""))
    return "\n".join(lines)


def render_audit_report(products: List[ProductAuditRecord],
                        tracker: Optional[SelectionTracker] = None) -> str:
    lines = ["# SEO/GEO Optimization Report", ""]
    if not products:
        lines.append("_No products to review._")
        return "\n".join(lines)

    for product in products:
        lines.append(render_product(product, tracker))
        lines.append("---")
        lines.append("")

    if tracker is not None:
        s = tracker.summary()
        lines.append("## Report Summary")
        lines.append("| Products analyzed | Descriptions selected | To-dos created | Items selected |")
        lines.append("|---:|---:|---:|---:|")
        lines.append(f"| {s.products_analyzed} | {s.descriptions_selected} | {s.todos_created} | {s.items_selected} |")
    return "\n".join(lines)


def render_submission_markdown(payload: SubmissionPayload) -> str:
    lines = ["# SEO/GEO Review Submission", ""]
    if not payload.products:
        lines.append("_No products._")
    for entry in payload.products:
        lines.append(f"## {entry.title or entry.id} ({entry.id})")
        lines.append("**Description:** " + entry.selected_description)
        if entry.custom_description is not None:
            lines.append("**Custom description:**")
            lines.append(_blockquote(entry.custom_description))
        lines.append("**Completed:** " + (", ".join(entry.completed_items) or "(none)"))
        lines.append("**To-dos:**")
        if entry.todos:
            lines.extend(f"- {t}" for t in entry.todos)
        else:
            lines.append("(none)")
        lines.append("")
    return "\n".join(lines)
