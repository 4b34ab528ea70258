from functools import wraps

import markdown
from flask import session, redirect, url_for


# ==========================================================
# 📝 MARKDOWN RENDERING
# ==========================================================
def render_markdown(text) -> str:
    """Convert markdown source (str or UTF-8 bytes) to an HTML fragment."""
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")
    return markdown.markdown(text, extensions=["fenced_code", "tables"])


# ==========================================================
# 🔒 AUTH GUARD
# ==========================================================
SIGNIN_REQUIRED_MESSAGE = "You must be signed in to do that"


def is_signed_in(sess) -> bool:
    return bool(sess.get("username"))


def login_required(func):
    """Redirects home with a flash message unless a user is signed in."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        if not is_signed_in(session):
            session["message"] = SIGNIN_REQUIRED_MESSAGE
            return redirect(url_for("index"))
        return func(*args, **kwargs)
    return wrapper


def registration_error_message(credentials, username, password, code, expected_code):
    """
    Checks a sign-up form in order: empty fields, taken username, wrong code.
    Returns the first error message, or None when the form is acceptable.
    """
    if any(not field for field in (username, password, code)):
        return "Please complete the form"
    if credentials.exists(username):
        return "Username is already taken"
    if code != expected_code:
        return "Invalid registration code"
    return None
