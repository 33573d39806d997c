import os
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

class Config:
    # Application Configuration
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'default-secret-key'

    # Tax forms: blank IRS templates and the signature font
    TAX_FORMS_DIR = os.environ.get('TAX_FORMS_DIR') or os.path.join(BASE_DIR, 'resources', 'tax-forms')
    SIGNATURE_FONT_PATH = os.environ.get('SIGNATURE_FONT_PATH') or os.path.join(
        BASE_DIR, 'resources', 'fonts', 'JustMeAgainDownHere-Regular.ttf'
    )
    PDF_CREATOR = os.environ.get('PDF_CREATOR') or 'Open Collective'

    # Expenses API (GraphQL)
    API_URL = os.environ.get('API_URL') or 'https://api.opencollective.com/graphql/v2'
    API_TIMEOUT = int(os.environ.get('API_TIMEOUT') or 10)
    WEBSITE_URL = os.environ.get('WEBSITE_URL') or 'https://opencollective.com'

    # Server Configuration
    PORT = int(os.environ.get('PORT') or 5001)
