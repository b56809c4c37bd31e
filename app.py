from __future__ import annotations
import os, logging
from flask import Flask, render_template, request, jsonify
from dotenv import load_dotenv
from converter import parse_input, ErrorResult

load_dotenv()
logging.basicConfig(level=os.environ.get('LOG_LEVEL', 'INFO').upper(),
                    format='%(asctime)s %(levelname)s %(name)s: %(message)s')
logger = logging.getLogger(__name__)

app = Flask(__name__, instance_relative_config=True)
app.secret_key = os.environ.get('SECRET_KEY', 'dev-secret')
PORT = int(os.environ.get('PORT', 3000))

# Forms on the page, keyed by the unit each one submits
FORM_UNITS = ('gal', 'lbs')


def full_input(raw, unit):
    # "3" + "gal" -> "3 gal"
    raw = raw or ''; unit = unit or ''
    return f'{raw} {unit}' if raw else unit


def render_result(result) -> str:
    return result.error if isinstance(result, ErrorResult) else result.sentence


# ---------- Routes ----------
@app.route('/', methods=['GET', 'POST'])
def index():
    outputs = {}
    if request.method == 'POST':
        unit = (request.form.get('unit') or '').strip()
        result = parse_input(full_input(request.form.get('input'), unit))
        if unit in FORM_UNITS:
            outputs[unit] = render_result(result)
    return render_template('index.html', outputs=outputs)


@app.route('/api/convert')
def api_convert():
    raw = request.args.get('input')
    if not raw:
        return jsonify({'error': 'input required'})
    result = parse_input(raw)
    logger.info('convert %r -> %s', raw, render_result(result))
    return jsonify(result.as_dict())


@app.errorhandler(404)
def not_found(_e):
    return 'Not Found', 404


# ---------- Run ----------
if __name__ == '__main__':
    app.run(port=PORT, debug=os.environ.get('FLASK_DEBUG') == '1')
