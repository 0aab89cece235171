"""
Blockmail Starter Template
==========================

A ready-to-run Flask application with the newsletter editor enabled.

Run with:
    python app.py

Visit:
    http://localhost:5000                            - Homepage
    http://localhost:5000/admin/newsletter/editor/new - New newsletter (admin session required)
"""

from flask import Flask, jsonify

from blockmail import Blockmail, Config

# Create Flask app
app = Flask(__name__)
app.config['SECRET_KEY'] = Config.SECRET_KEY or 'dev-secret-change-me'

# Initialize Blockmail - registers the newsletter editor and public view
blockmail = Blockmail(app)


# =============================================================================
# Your Routes - Add your own routes below
# =============================================================================

@app.route('/')
def index():
    """Homepage"""
    return (
        '<h1>Blockmail</h1>'
        '<p><a href="/admin/newsletter/editor/new">New newsletter</a></p>'
        '<p><a href="/admin/newsletter/editor/new?template=dmc-classic">New from the classic template</a></p>'
    )


@app.route('/health')
def health():
    return jsonify({'status': 'ok'})


# =============================================================================
# Run the app
# =============================================================================

if __name__ == '__main__':
    print("\n" + "=" * 60)
    print("Blockmail Starter Template")
    print("=" * 60)
    print(f"Homepage:        http://localhost:{Config.port}")
    print(f"New newsletter:  http://localhost:{Config.port}/admin/newsletter/editor/new")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=Config.port, debug=True)
