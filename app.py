from flask import Flask, request, render_template, send_file, flash, jsonify
import io
import os
import tempfile
from dataclasses import asdict
from werkzeug.utils import secure_filename
from datetime import datetime
import argparse

from airport_lookup import load_airport_data
from foreflight_config import DEFAULT_AIRPORT_CODES_PATH
from foreflight_parser import parse_date_flexible, parse_foreflight
from logbook_analysis import (
    calculate_logbook_summary,
    detect_certifications,
    detect_milestones,
    get_currency_info,
    get_recent_flights,
)
from logbook_export import logbook_to_csv, logbook_to_json

app = Flask(__name__)
app.secret_key = 'logbook-analytics-secret-key'  # Required for flash messages
app.config['MAX_CONTENT_LENGTH'] = 16 * 1024 * 1024  # Limit uploads to 16MB
app.config['UPLOAD_FOLDER'] = tempfile.gettempdir()  # Use system temp directory for uploads
app.config['AIRPORT_CODES_PATH'] = DEFAULT_AIRPORT_CODES_PATH if os.path.exists(DEFAULT_AIRPORT_CODES_PATH) else None

ALLOWED_EXTENSIONS = {'csv'}
OUTPUT_TYPES = {'report', 'json', 'csv'}

# Loaded once at startup and only read afterwards
app.config['AIRPORTS'] = load_airport_data(app.config['AIRPORT_CODES_PATH'])


def allowed_file(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def build_report(data, as_of=None, recent=5):
    """Collect every analytics view of the logbook into one JSON-ready dict."""
    summary = calculate_logbook_summary(data)
    return {
        'summary': asdict(summary),
        'currency': asdict(get_currency_info(data, today=as_of)),
        'certifications': [asdict(cert) for cert in detect_certifications(data)],
        'milestones': [asdict(milestone) for milestone in detect_milestones(data, summary, app.config['AIRPORTS'])],
        'recent_flights': [asdict(flight) for flight in get_recent_flights(data, recent)],
    }


@app.route('/', methods=['GET', 'POST'])
def index():
    if request.method == 'POST':
        # Check if logbook file is present
        if 'logbook_file' not in request.files:
            flash('No logbook file selected', 'error')
            return render_template('index.html'), 400

        logbook_file = request.files['logbook_file']

        if logbook_file.filename == '':
            flash('No logbook file selected', 'error')
            return render_template('index.html'), 400

        if not allowed_file(logbook_file.filename):
            flash('Invalid file type. Please upload a ForeFlight CSV export.', 'error')
            return render_template('index.html'), 400

        output_type = request.form.get('output', 'report')
        if output_type not in OUTPUT_TYPES:
            flash(f'Unknown output type: {output_type}', 'error')
            return render_template('index.html'), 400

        as_of = None
        if request.form.get('as_of'):
            try:
                as_of = parse_date_flexible(request.form['as_of']).date()
            except ValueError as e:
                flash(str(e), 'error')
                return render_template('index.html'), 400

        # Save the upload under a unique temporary name
        timestamp = datetime.now().strftime('%Y%m%d%H%M%S%f')
        logbook_filename = f"logbook_{timestamp}_{secure_filename(logbook_file.filename)}"
        logbook_path = os.path.join(app.config['UPLOAD_FOLDER'], logbook_filename)
        logbook_file.save(logbook_path)

        try:
            data = parse_foreflight(logbook_path)
        finally:
            # Clean up temporary files
            if os.path.exists(logbook_path):
                os.unlink(logbook_path)

        if data.is_empty():
            flash('No aircraft or flights found. Is this a ForeFlight logbook export?', 'error')
            return render_template('index.html'), 422

        if output_type == 'report':
            return jsonify(build_report(data, as_of))

        if output_type == 'json':
            content, mimetype = logbook_to_json(data), 'application/json'
        else:
            content, mimetype = logbook_to_csv(data), 'text/csv'

        return send_file(
            io.BytesIO(content.encode('utf-8')),
            mimetype=mimetype,
            as_attachment=True,
            download_name=f"Logbook_{datetime.now().strftime('%Y-%m-%d')}.{output_type}",
        )

    return render_template('index.html')


if __name__ == '__main__':
    # Parse command line arguments
    parser = argparse.ArgumentParser(description='Run the Logbook Analytics web application')
    parser.add_argument('--port', type=int, default=5000, help='Port to run the web server on')
    parser.add_argument('--host', type=str, default='127.0.0.1', help='Host to run the web server on')
    args = parser.parse_args()

    # Run the app
    app.run(host=args.host, port=args.port)
