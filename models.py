import os
from enum import Enum

import yaml
from werkzeug.security import generate_password_hash, check_password_hash


class DocumentNotFound(LookupError):
    """Raised when a document name does not resolve to a file in the store."""

    def __init__(self, name):
        super().__init__(name)
        self.name = name


class DocumentKind(Enum):
    PLAIN_TEXT = (".txt", "text/plain")
    MARKDOWN = (".md", "text/html")

    @property
    def extension(self):
        return self.value[0]

    @property
    def mimetype(self):
        return self.value[1]

    @classmethod
    def from_filename(cls, name: str):
        for kind in cls:
            if name.endswith(kind.extension):
                return kind
        return None


# ==========================================================
# 📄 DOCUMENTS
# ==========================================================
class DocumentStore:
    """Documents kept as plain files in a single directory."""

    def __init__(self, root: str):
        self.root = root
        os.makedirs(self.root, exist_ok=True)

    def _path(self, name: str) -> str:
        if not name or name in (".", "..") or os.path.basename(name) != name:
            raise DocumentNotFound(name)
        return os.path.join(self.root, name)

    def list(self):
        return sorted(
            entry.name for entry in os.scandir(self.root) if entry.is_file()
        )

    def exists(self, name: str) -> bool:
        try:
            return os.path.isfile(self._path(name))
        except DocumentNotFound:
            return False

    def read(self, name: str) -> bytes:
        if not self.exists(name):
            raise DocumentNotFound(name)
        with open(self._path(name), "rb") as f:
            return f.read()

    def write(self, name: str, content=b""):
        if isinstance(content, str):
            content = content.encode("utf-8")
        with open(self._path(name), "wb") as f:
            f.write(content)

    def delete(self, name: str):
        if not self.exists(name):
            raise DocumentNotFound(name)
        os.remove(self._path(name))

    @staticmethod
    def duplicate_name(name: str) -> str:
        # Only the first two dot-separated segments are used: "a.b.txt" -> "a_copy.b"
        parts = name.split(".")
        base = parts[0]
        extension = parts[1] if len(parts) > 1 else ""
        return f"{base}_copy.{extension}"

    def duplicate(self, name: str) -> str:
        content = self.read(name)
        new_name = self.duplicate_name(name)
        self.write(new_name, content)
        return new_name

    def validate_new_name(self, name):
        """Return an error message for an unusable new filename, or None."""
        name = name or ""
        if not name.strip():
            return "A name is required"
        if os.path.basename(name) != name or name in (".", ".."):
            return "Filename cannot include a directory"
        if DocumentKind.from_filename(name) is None:
            return "Filename must include a valid extension"
        if name in self.list():
            return f"'{name}' already exists"
        return None


# ==========================================================
# 🔑 CREDENTIALS
# ==========================================================
class CredentialStore:
    """username -> password hash, persisted as a single YAML mapping."""

    def __init__(self, path: str):
        self.path = path

    def load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def exists(self, username: str) -> bool:
        return username in self.load()

    def verify(self, username: str, password: str) -> bool:
        password_hash = self.load().get(username)
        if not password_hash or not password:
            return False
        return check_password_hash(password_hash, password)

    def register(self, username: str, password: str):
        credentials = self.load()
        credentials[username] = generate_password_hash(password)
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(credentials, f, default_flow_style=False)
