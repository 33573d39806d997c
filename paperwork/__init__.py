from flask import Flask
from config import Config
from paperwork.pdf_fillers.signature import SignatureFont

def create_app(config_class=Config):
    # Initialize Flask app
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config_class)

    # Load the signature font once for the whole process
    app.extensions['signature_font'] = SignatureFont.load(app.config['SIGNATURE_FONT_PATH'])

    # Register blueprints
    from paperwork.routes import main_bp
    app.register_blueprint(main_bp)

    # Register error handlers
    @app.errorhandler(404)
    def not_found_error(error):
        return {'error': 'Not Found'}, 404

    @app.errorhandler(500)
    def internal_error(error):
        return {'error': 'Internal Server Error'}, 500

    return app
