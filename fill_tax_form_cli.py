#!/usr/bin/env python3
"""Standalone CLI script to fill a tax form without Flask.

Run from project root::

    python fill_tax_form_cli.py W9 values.json -o filled_w9.pdf [--final]

*values.json* holds the same JSON object the ``/api/tax-form`` endpoint
receives (before base64 encoding).
"""
import argparse
import json
import sys
from pathlib import Path

from config import Config
from paperwork.pdf_fillers.signature import SignatureFont
from paperwork.tax_forms import TAX_FORMS, generate_tax_form, is_valid_tax_form_type


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description='Fill a tax form PDF from a JSON file')
    parser.add_argument('form_type', help=', '.join(TAX_FORMS))
    parser.add_argument('values', type=Path)
    parser.add_argument('-o', '--output', type=Path, default=None)
    parser.add_argument('--final', action='store_true', help='flatten the form and embed the raw values')
    parser.add_argument('--templates', default=Config.TAX_FORMS_DIR)
    args = parser.parse_args(argv)

    form_type = args.form_type.upper()
    if not is_valid_tax_form_type(form_type):
        print(f"Invalid form type: {args.form_type}")
        sys.exit(1)

    definition = TAX_FORMS[form_type]
    template = definition.template_path(args.templates)
    if not template.exists():
        print(f"Template not found: {template.resolve()}")
        sys.exit(1)

    values = json.loads(args.values.read_text(encoding='utf-8'))
    font = SignatureFont.load(Config.SIGNATURE_FONT_PATH)
    pdf_bytes = generate_tax_form(definition, values, template.read_bytes(), font,
                                  is_final=args.final, creator=Config.PDF_CREATOR)

    output = args.output or Path(f'filled_{form_type.lower()}.pdf')
    output.write_bytes(pdf_bytes)
    print("Saved:", output.resolve())


if __name__ == '__main__':
    main()
