# seo_geo_review/cli_chat.py
import json
import logging
import shlex

from .loaders import load_products
from .models import DESCRIPTION_ITEM, NO_CHANGE
from .render import render_product
from .tracker import SelectionTracker

BANNER = """\
SEO/GEO Review (Chat Demo)
Commands:
  list
  show <id>
  todo <id> <seo-N|geo-N>
  complete <id> [item]
  describe <id> <no-change|seo|geo|balanced>
  custom <id> <text>
  status
  submit
  help
  quit
"""

DESCRIBE_ALIASES = {
    "seo": "seoPrioritized",
    "geo": "geoPrioritized",
    "balanced": "balanced",
    "seoprioritized": "seoPrioritized",
    "geoprioritized": "geoPrioritized",
}


def _status(tracker: SelectionTracker) -> str:
    lines = []
    for p in tracker.products:
        done = tracker.completed_count(p.id)
        total = tracker.total_actionable_items(p.id)
        choice = tracker.description_choice_key(p.id) or "(unset)"
        lines.append(f"{p.id}  {done}/{total}  description={choice}  {p.title}")
    s = tracker.summary()
    lines.append(
        f"products={s.products_analyzed} descriptions={s.descriptions_selected} "
        f"todos={s.todos_created} items={s.items_selected}"
    )
    return "\n".join(lines)


def _custom(tracker: SelectionTracker, pid: str, text: str) -> str:
    if tracker.product(pid) is None:
        return f"Unknown product '{pid}'. Try `list`."
    tracker.enable_custom_description(pid)
    tracker.set_custom_description_text(pid, text)
    return "✅ Custom description saved."


def handle(tracker: SelectionTracker, line: str) -> str:
    """Apply one chat command and return the text to print."""
    raw = line.split(maxsplit=2)
    if raw and raw[0].lower() == "custom" and len(raw) == 3:
        # free text, taken verbatim
        return _custom(tracker, raw[1], raw[2])
    try:
        parts = shlex.split(line)
    except ValueError as e:
        return f"Error: {e}"
    if not parts:
        return ""
    cmd, args = parts[0].lower(), parts[1:]

    if cmd == "help":
        return BANNER
    if cmd == "list":
        return "\n".join(f"{p.id}  {p.title}" for p in tracker.products) or "(no products)"
    if cmd == "status":
        return _status(tracker)
    if cmd == "submit":
        return json.dumps(tracker.build_submission().to_dict(), indent=2)

    if not args:
        return f"Usage: see `help` ({cmd} needs a product id)."
    pid = args[0]
    product = tracker.product(pid)
    if product is None:
        return f"Unknown product '{pid}'. Try `list`."

    # ---- SHOW ----
    if cmd == "show":
        return render_product(product, tracker)

    # ---- TODO ----
    if cmd == "todo" and len(args) == 2:
        tag = args[1]
        tracker.toggle_todo(pid, tag)
        state = "added" if tracker.is_todo_selected(pid, tag) else "removed"
        return f"✅ To-do {tag} {state}."

    # ---- COMPLETE ----
    if cmd == "complete":
        item = args[1] if len(args) > 1 else DESCRIPTION_ITEM
        tracker.toggle_completed_item(pid, item)
        state = "completed" if tracker.is_completed(pid, item) else "reopened"
        return f"✅ {item} {state}."

    # ---- DESCRIBE ----
    if cmd == "describe" and len(args) == 2:
        choice = args[1].lower()
        if choice == NO_CHANGE:
            tracker.select_description(pid, NO_CHANGE)
            return "✅ Keeping the original description."
        key = DESCRIBE_ALIASES.get(choice)
        if key is None:
            return "Choose one of: no-change, seo, geo, balanced (or `custom <id> <text>`)."
        tracker.select_description(pid, product.description_options.as_choices()[key])
        return f"✅ Description set to {key}."

    return "Unknown command. Type `help`."


def main():
    logging.basicConfig(level=logging.WARNING)
    tracker = SelectionTracker(load_products())
    print(BANNER)

    while True:
        try:
            line = input("review> ").strip()
        except EOFError:
            break
        if not line:
            continue
        if line.lower() in ("quit", "exit"):
            break
        print(handle(tracker, line))

if __name__ == "__main__":
    main()
