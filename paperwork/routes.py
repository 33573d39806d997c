from flask import Blueprint, Response, current_app, jsonify, request
import base64
import json

from paperwork.expenses import fetch_expense
from paperwork.invoice import DEFAULT_PAGE_FORMAT, PAGE_FORMATS, render_invoice_html, render_invoice_pdf
from paperwork.pdf_fillers.pdf_form import FormFieldError, MaxLengthExceededError
from paperwork.tax_forms import TAX_FORMS, generate_tax_form, is_valid_tax_form_type

EXPENSE_NOT_FOUND = 'Could not retrieve the information for this expense.'

TRUTHY_FLAGS = {'1', 'true', 'yes', 'on'}

main_bp = Blueprint('main', __name__)


def decode_values(raw):
    """Values are sent as base64 encoded JSON"""
    if not raw:
        return {}
    # "+" comes back as a space once the query string is decoded
    decoded = base64.b64decode(raw.replace(' ', '+')).decode('utf-8')
    values = json.loads(decoded or '{}')
    if not isinstance(values, dict):
        raise ValueError('Values must be a JSON object')
    return values


def is_flag_set(raw):
    return (raw or '').strip().lower() in TRUTHY_FLAGS


@main_bp.route('/')
def index():
    return jsonify({"message": "Expense invoices & tax forms"})


@main_bp.route('/api/tax-form/<filename>', methods=['GET'])
def tax_form(filename):
    # Get values from query
    form_type = (request.args.get('formType') or '').upper()
    if not form_type:
        return 'Missing form type', 400
    elif not is_valid_tax_form_type(form_type):
        return 'Invalid form type', 400

    try:
        values = decode_values(request.args.get('values'))
    except ValueError as e:  # bad base64, bad utf-8 or bad JSON
        current_app.logger.warning('Invalid values for %s form: %s', form_type, e)
        return 'Invalid values', 400

    # Load file
    definition = TAX_FORMS[form_type]
    template_path = definition.template_path(current_app.config['TAX_FORMS_DIR'])
    if not template_path.exists():
        current_app.logger.error('Missing template for %s form: %s', form_type, template_path)
        return 'Form template not available', 404

    try:
        pdf_bytes = generate_tax_form(
            definition,
            values,
            template_path.read_bytes(),
            current_app.extensions['signature_font'],
            is_final=is_flag_set(request.args.get('isFinal')),
            creator=current_app.config['PDF_CREATOR'],
        )
    except MaxLengthExceededError as e:
        return str(e), 400
    except FormFieldError:
        raise
    except (TypeError, ValueError) as e:  # values of the wrong shape, e.g. a bad date
        current_app.logger.warning('Invalid values for %s form: %s', form_type, e)
        return 'Invalid values', 400

    response = Response(pdf_bytes, mimetype='application/pdf')
    response.headers['Content-Disposition'] = f'inline; filename="{filename}"'
    response.headers['Access-Control-Allow-Origin'] = '*'
    return response


@main_bp.route('/expenses/<int:legacy_id>/invoice', methods=['GET'])
def expense_invoice(legacy_id):
    page_format = request.args.get('pageFormat') or DEFAULT_PAGE_FORMAT
    if page_format not in PAGE_FORMATS:
        return f'Invalid page format, expected one of: {", ".join(PAGE_FORMATS)}', 400
    output = (request.args.get('format') or 'pdf').lower()
    if output not in ('pdf', 'html'):
        return 'Invalid format, expected pdf or html', 400

    expense = fetch_expense(legacy_id, current_app.config['API_URL'], current_app.config['API_TIMEOUT'])
    if expense is None:
        return EXPENSE_NOT_FOUND, 404

    website_url = current_app.config['WEBSITE_URL']
    if output == 'html':
        return render_invoice_html(expense, page_format, website_url)

    pdf_bytes = render_invoice_pdf(expense, page_format, website_url)
    response = Response(pdf_bytes, mimetype='application/pdf')
    response.headers['Content-Disposition'] = f'inline; filename="expense-{legacy_id}-invoice.pdf"'
    return response
