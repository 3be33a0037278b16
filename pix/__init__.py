from flask import Flask
from pix.routes.pagamentos_pix import pagamentos_pix_bp
from pix.error import register_erro_handlers
from pix.rate_limit import limiter


def create_api():
    app = Flask('API_PIX')

    limiter.init_app(app)

    app.register_blueprint(pagamentos_pix_bp, url_prefix='/pix')

    register_erro_handlers(app)

    return app
