from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional

from .config import ReportConfig
from .renderer import generate_report_pdf, load_config_from_yaml


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Generate the laboratory analytics PDF report from JSON.")
    parser.add_argument("--input", type=Path, required=True, help="Path to analytics payload JSON")
    parser.add_argument("--user", required=True, help="Identity shown as 'Generated by'")
    parser.add_argument("--out", type=Path, default=None, help="Output directory (overrides config.output_dir)")
    parser.add_argument("--config", type=Path, default=None, help="Optional YAML config file")
    parser.add_argument("--title", default=None, help="Report title (defaults to config.default_title)")
    parser.add_argument("--verbose", action="store_true", help="Log page breaks and chart fallbacks")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    cfg = load_config_from_yaml(args.config) if args.config else ReportConfig()
    if args.out is not None:
        cfg.output_dir = args.out

    data = json.loads(args.input.read_text(encoding="utf-8"))
    out_path = generate_report_pdf(data, args.user, cfg, title=args.title)
    print(str(out_path))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
