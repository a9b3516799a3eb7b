import argparse
import json
import os
import sys

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "backend")))

from perf_report.errors import ReportError
from perf_report.services.report_generator import ReportGenerator
from perf_report.services.report_runner import ReportRunner


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render the performance section of a Lighthouse result")
    parser.add_argument("lhr", help="Path to a Lighthouse JSON result")
    parser.add_argument("--html", help="Write the HTML report to this path")
    parser.add_argument("--json", action="store_true", help="Print the section tree as JSON")
    args = parser.parse_args(argv)

    with open(args.lhr, "r", encoding="utf-8") as f:
        lhr = json.load(f)

    try:
        rendered = ReportRunner().render(lhr)
    except ReportError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    section = rendered.section
    if args.json:
        print(json.dumps(section.as_dict(), indent=2))
    else:
        print(f"{section.header.title}: {section.header.score if section.header.score is not None else '?'}")
        for group in section.sections:
            print(f"  {group.key}: {len(group.items)} item(s)")

    if args.html:
        html = ReportGenerator().render_html(section, rendered.url)
        with open(args.html, "w", encoding="utf-8") as f:
            f.write(html)
        print(f"HTML saved to {args.html}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
