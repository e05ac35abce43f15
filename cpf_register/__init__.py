"""CPF Registration Flask Application Package.

To use the Flask app:
    from cpf_register.flask_app import create_app

To run the registration flow without Flask:
    from cpf_register.core.registration_service import register_customer
"""
# Note: We don't import flask_app by default so the core flow stays usable
# without building a Flask application
