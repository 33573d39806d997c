#!/usr/bin/env python3
# inspect_fields.py
"""List the form fields of a PDF template.

    python inspect_fields.py resources/tax-forms/fw9.pdf
    python inspect_fields.py resources/tax-forms/fw9.pdf --fill-names fw9-names.pdf

With ``--fill-names`` every text field is filled with its own (qualified)
name, which makes it easy to map a new template.
"""
import argparse
from pathlib import Path

from paperwork.pdf_fillers.document import TaxFormDocument
from paperwork.pdf_fillers.pdf_form import describe_fields, fill_all_fields_with_path


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument('template', type=Path)
    parser.add_argument('--fill-names', type=Path, metavar='OUTPUT')
    args = parser.parse_args(argv)

    document = TaxFormDocument.load(args.template.read_bytes())
    lines = describe_fields(document.form)
    print(f"Found {len(lines)} fields:\n")
    for i, line in enumerate(lines, 1):
        print(f"{i}. {line}")
    print("\n*** End of list ***")

    if args.fill_names:
        fill_all_fields_with_path(document.form)
        args.fill_names.write_bytes(document.save())
        print("Saved:", args.fill_names.resolve())


if __name__ == "__main__":
    main()
