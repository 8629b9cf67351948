"""
Selection tracking for an SEO/GEO review session.

One `SelectionStore` holds the per-product state (description choice, custom
text, completed items, to-do flags). `SelectionTracker` wraps it with the
operations the UI calls and derives counts and the submission payload. Every
operation is total: unknown product ids read as empty state and are created on
first write.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from .config import POLICY_FIXED, POLICY_PER_PRODUCT, actionable_policy
from .models import (
    CUSTOM,
    DEFAULT_ACTIONABLE_ITEMS,
    NO_CHANGE,
    ProductAuditRecord,
    ProductSelection,
    ReportSummary,
    SelectionState,
    SubmissionPayload,
)

logger = logging.getLogger(__name__)


# ---------- store ----------

class SelectionStore:
    """Session-scoped selection state keyed by product id."""

    def __init__(self):
        self._states: Dict[str, SelectionState] = {}

    def get(self, product_id: str) -> Optional[SelectionState]:
        return self._states.get(product_id)

    def ensure(self, product_id: str) -> SelectionState:
        state = self._states.get(product_id)
        if state is None:
            state = SelectionState()
            self._states[product_id] = state
        return state

    def __contains__(self, product_id: str) -> bool:
        return product_id in self._states

    def __len__(self) -> int:
        return len(self._states)


def _flip(items: List[str], tag: str) -> None:
    if tag in items:
        items.remove(tag)
    else:
        items.append(tag)


# ---------- actionable-item policy ----------

class ActionablePolicy:
    """
    Denominator for a product's progress ratio. `fixed` always reports the
    constant 8; `per_product` counts the product's actual recommendations plus
    one for the description choice.
    """

    def __init__(self, mode: str = POLICY_FIXED):
        if mode not in (POLICY_FIXED, POLICY_PER_PRODUCT):
            raise ValueError(f"Unknown actionable policy '{mode}'")
        self.mode = mode

    def total(self, product: Optional[ProductAuditRecord]) -> int:
        if self.mode == POLICY_FIXED or product is None:
            return DEFAULT_ACTIONABLE_ITEMS
        return len(product.seo.recommendations) + len(product.geo.recommendations) + 1


# ---------- tracker ----------

class SelectionTracker:
    def __init__(self,
                 products: Iterable[ProductAuditRecord],
                 store: Optional[SelectionStore] = None,
                 policy: Optional[ActionablePolicy] = None):
        self.products: List[ProductAuditRecord] = list(products)
        self.store = store if store is not None else SelectionStore()
        self.policy = policy or ActionablePolicy(actionable_policy())
        self._by_id = {p.id: p for p in self.products}

    def product(self, product_id: str) -> Optional[ProductAuditRecord]:
        return self._by_id.get(product_id)

    # ----- description choice -----
    def select_description(self, product_id: str, choice: str) -> None:
        state = self.store.ensure(product_id)
        state.selected_description = choice
        if choice != CUSTOM:
            # hide the input only; typed text is kept
            state.show_custom_input = False

    def enable_custom_description(self, product_id: str) -> None:
        self.store.ensure(product_id).show_custom_input = True
        self.select_description(product_id, CUSTOM)

    def set_custom_description_text(self, product_id: str, text: str) -> None:
        self.store.ensure(product_id).custom_description_text = text

    def selected_description(self, product_id: str) -> Optional[str]:
        state = self.store.get(product_id)
        return state.selected_description if state else None

    def custom_description_text(self, product_id: str) -> Optional[str]:
        state = self.store.get(product_id)
        return state.custom_description_text if state else None

    def is_custom_input_visible(self, product_id: str) -> bool:
        state = self.store.get(product_id)
        return bool(state and state.show_custom_input)

    def description_choice_key(self, product_id: str) -> Optional[str]:
        """Map the stored choice back to its option key (radio position)."""
        choice = self.selected_description(product_id)
        if choice is None or choice in (NO_CHANGE, CUSTOM):
            return choice
        product = self.product(product_id)
        if product is not None:
            for key, text in product.description_options.as_choices().items():
                if text == choice:
                    return key
        return None

    # ----- toggles -----
    def toggle_completed_item(self, product_id: str, item_tag: str) -> None:
        _flip(self.store.ensure(product_id).completed_items, item_tag)

    def toggle_todo(self, product_id: str, todo_tag: str) -> None:
        _flip(self.store.ensure(product_id).selected_todos, todo_tag)

    def is_completed(self, product_id: str, item_tag: str) -> bool:
        state = self.store.get(product_id)
        return bool(state and item_tag in state.completed_items)

    def is_todo_selected(self, product_id: str, todo_tag: str) -> bool:
        state = self.store.get(product_id)
        return bool(state and todo_tag in state.selected_todos)

    # ----- derived counts -----
    def completed_count(self, product_id: str) -> int:
        state = self.store.get(product_id)
        if state is None:
            return 0
        described = 1 if state.selected_description else 0
        return len(state.completed_items) + len(state.selected_todos) + described

    def total_actionable_items(self, product_id: Optional[str] = None) -> int:
        product = self.product(product_id) if product_id is not None else None
        return self.policy.total(product)

    def summary(self) -> ReportSummary:
        """Footer counts. Any stored choice counts as selected, even an empty variant."""
        descriptions = 0
        todos = 0
        for p in self.products:
            state = self.store.get(p.id)
            if state is None:
                continue
            if state.selected_description is not None:
                descriptions += 1
            todos += len(state.selected_todos)
        return ReportSummary(
            products_analyzed=len(self.products),
            descriptions_selected=descriptions,
            todos_created=todos,
            items_selected=sum(self.completed_count(p.id) for p in self.products),
        )

    # ----- submission -----
    def build_submission(self) -> SubmissionPayload:
        entries = []
        for p in self.products:
            state = self.store.get(p.id) or SelectionState()
            entries.append(ProductSelection(
                id=p.id,
                title=p.title,
                selected_description=state.selected_description or NO_CHANGE,
                custom_description=state.custom_description_text,
                completed_items=list(state.completed_items),
                todos=list(state.selected_todos),
            ))
        return SubmissionPayload(products=entries)


# ---------- action replay ----------

def _resolve_choice(tracker: SelectionTracker, product_id: str, choice: str) -> str:
    """`balanced`/`seoPrioritized`/`geoPrioritized` resolve to the product's literal text."""
    product = tracker.product(product_id)
    if product is not None:
        options = product.description_options.as_choices()
        if choice in options:
            return options[choice]
    return choice


def apply_action(tracker: SelectionTracker, action: Dict[str, Any]) -> None:
    op = action.get("op")
    pid = str(action.get("product_id", ""))
    if op == "select_description":
        tracker.select_description(pid, _resolve_choice(tracker, pid, str(action.get("choice", NO_CHANGE))))
    elif op == "enable_custom_description":
        tracker.enable_custom_description(pid)
    elif op == "set_custom_description_text":
        tracker.set_custom_description_text(pid, str(action.get("text", "")))
    elif op == "toggle_completed_item":
        tracker.toggle_completed_item(pid, str(action.get("tag", "description")))
    elif op == "toggle_todo":
        tag = action.get("tag")
        if tag is None:
            raise ValueError("toggle_todo needs a 'tag'")
        tracker.toggle_todo(pid, str(tag))
    else:
        raise ValueError(f"Unknown selection action '{op}'")


def replay(tracker: SelectionTracker, actions: Iterable[Dict[str, Any]]) -> SelectionTracker:
    count = 0
    for action in actions:
        apply_action(tracker, action)
        count += 1
    logger.debug("Replayed %d selection actions", count)
    return tracker


# ---------- tabular view ----------

PROGRESS_COLUMNS = ["id", "title", "description", "completed", "todos", "progress", "total"]

def progress_frame(tracker: SelectionTracker) -> pd.DataFrame:
    rows = []
    for p in tracker.products:
        state = tracker.store.get(p.id) or SelectionState()
        rows.append({
            "id": p.id,
            "title": p.title,
            "description": tracker.description_choice_key(p.id) or NO_CHANGE,
            "completed": ", ".join(state.completed_items),
            "todos": ", ".join(state.selected_todos),
            "progress": tracker.completed_count(p.id),
            "total": tracker.total_actionable_items(p.id),
        })
    return pd.DataFrame(rows, columns=PROGRESS_COLUMNS)
