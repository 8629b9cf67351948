import argparse
import json
import logging

from .loaders import load_products, load_records_file
from .render import render_audit_report
from .tracker import SelectionTracker, replay

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Render the SEO/GEO review as Markdown.")
    src = p.add_mutually_exclusive_group()
    src.add_argument('--data', help='JSON file with a list of records or {"pages": [...]}')
    src.add_argument('--encoded', help='base64-encoded JSON, as passed in the ?data= parameter')
    p.add_argument('--actions', help='JSON file with a list of selection actions to replay')
    p.add_argument('--out', default='report.md')
    p.add_argument('--submission', help='also write the submission payload to this JSON file')
    return p.parse_args(argv)

def main(argv=None):
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)

    products = load_records_file(args.data) if args.data else load_products(args.encoded)
    tracker = SelectionTracker(products)

    if args.actions:
        with open(args.actions, encoding='utf-8') as f:
            replay(tracker, json.load(f))

    md = render_audit_report(products, tracker)
    with open(args.out, 'w', encoding='utf-8') as f:
        f.write(md)
    logger.info("Wrote %s (%d products)", args.out, len(products))

    if args.submission:
        with open(args.submission, 'w', encoding='utf-8') as f:
            json.dump(tracker.build_submission().to_dict(), f, indent=2)
        logger.info("Wrote %s", args.submission)
    return 0

if __name__ == '__main__':
    raise SystemExit(main())
