import logging

from flask import (
    Flask, request, session, g,
    render_template, redirect, url_for, make_response
)

from config import get_config
from models import DocumentStore, CredentialStore, DocumentKind, DocumentNotFound
from utils import render_markdown, is_signed_in, login_required, registration_error_message

# ==========================================================
# ⚙️ APP SETUP
# ==========================================================
config = get_config()

# Root logging is configured before app.logger is first touched, so Flask
# does not attach its own default handler.
logging.basicConfig(level=config.LOG_LEVEL,
                    format="%(asctime)s %(levelname)s %(name)s - %(message)s")

app = Flask(__name__)
app.config.from_object(config)
app.logger.setLevel(app.config["LOG_LEVEL"])


@app.before_request
def open_stores():
    """Hand each request its own store handles built from the current config."""
    g.documents = DocumentStore(app.config["DATA_DIR"])
    g.credentials = CredentialStore(app.config["CREDENTIALS_PATH"])


@app.context_processor
def inject_page_context():
    # The flash message is consumed by whichever page renders first.
    return {
        "username": session.get("username"),
        "signed_in": is_signed_in(session),
        "message": session.pop("message", None),
    }


def flash_and_go_home(message):
    session["message"] = message
    return redirect(url_for("index"))


def not_found(filename):
    app.logger.debug("Document %r not found", filename)
    return flash_and_go_home(f"'{filename}' does not exist")


# ==========================================================
# 🚪 AUTHENTICATION ROUTES
# ==========================================================
@app.route("/users/signin", methods=["GET"])
def signin_page():
    return render_template("signin.html")


@app.route("/users/signin", methods=["POST"])
def signin():
    username = request.form.get("username", "")
    password = request.form.get("password", "")

    if g.credentials.verify(username, password):
        session["username"] = username
        session["message"] = "Welcome!"
        app.logger.info("User %r signed in", username)
        return redirect(url_for("index"))

    app.logger.warning("Failed sign-in for %r", username)
    session["message"] = "Invalid Credentials"
    return render_template("signin.html", form_username=username), 422


@app.route("/users/signout", methods=["POST"])
def signout():
    username = session.pop("username", None)
    app.logger.info("User %r signed out", username)
    return flash_and_go_home("You have been signed out")


@app.route("/users/create_account", methods=["GET"])
def account_page():
    return render_template("account.html")


@app.route("/users/create_account", methods=["POST"])
def create_account():
    username = request.form.get("username", "")
    password = request.form.get("password", "")
    code = request.form.get("code", "")

    error = registration_error_message(
        g.credentials, username, password, code, app.config["REGISTRATION_CODE"]
    )
    if error:
        session["message"] = error
        return render_template("account.html", form_username=username), 422

    g.credentials.register(username, password)
    app.logger.info("Account created for %r", username)
    session["message"] = "Account has been created"
    return redirect(url_for("signin_page"))


# ==========================================================
# 📁 DOCUMENT ROUTES
# ==========================================================
@app.route("/")
def index():
    return render_template("index.html", files=g.documents.list())


@app.route("/new", methods=["GET"])
@login_required
def new_document():
    return render_template("new.html")


@app.route("/create", methods=["POST"])
@login_required
def create_document():
    filename = request.form.get("filename", "")

    error = g.documents.validate_new_name(filename)
    if error:
        session["message"] = error
        return render_template("new.html", form_filename=filename), 422

    g.documents.write(filename, b"")
    app.logger.info("Created %r", filename)
    return flash_and_go_home(f"'{filename}' was created")


@app.route("/<filename>", methods=["GET"])
def view_document(filename):
    try:
        content = g.documents.read(filename)
    except DocumentNotFound:
        return not_found(filename)

    kind = DocumentKind.from_filename(filename)
    if kind is DocumentKind.MARKDOWN:
        return render_template("document.html", filename=filename,
                               body=render_markdown(content))

    response = make_response(content)
    response.mimetype = DocumentKind.PLAIN_TEXT.mimetype
    return response


@app.route("/<filename>/edit", methods=["GET"])
@login_required
def edit_document(filename):
    try:
        content = g.documents.read(filename)
    except DocumentNotFound:
        return not_found(filename)
    return render_template("edit.html", filename=filename,
                           content=content.decode("utf-8", errors="replace"))


@app.route("/<filename>", methods=["POST"])
@login_required
def update_document(filename):
    if DocumentKind.from_filename(filename) is None:
        return not_found(filename)
    try:
        g.documents.write(filename, request.form.get("content", ""))
    except DocumentNotFound:
        return not_found(filename)
    app.logger.info("Updated %r", filename)
    return flash_and_go_home(f"'{filename}' has been updated")


@app.route("/<filename>/delete", methods=["POST"])
@login_required
def delete_document(filename):
    try:
        g.documents.delete(filename)
    except DocumentNotFound:
        return not_found(filename)
    app.logger.info("Deleted %r", filename)
    return flash_and_go_home(f"'{filename}' was deleted")


@app.route("/<filename>/duplicate", methods=["POST"])
@login_required
def duplicate_document(filename):
    try:
        copy_name = g.documents.duplicate(filename)
    except DocumentNotFound:
        return not_found(filename)
    app.logger.info("Duplicated %r as %r", filename, copy_name)
    return flash_and_go_home(f"'{filename}' was duplicated")


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=8080, debug=True)
