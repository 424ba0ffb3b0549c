import os
import sys
from pathlib import Path

sys.path.insert(0, os.path.abspath(".."))

project = "bytevec"

extensions = [
    "myst_parser",
    "sphinx.ext.autodoc",
    "sphinx_autodoc_typehints",
    "sphinx.ext.napoleon",
    "sphinx_rtd_theme",
]

exclude_patterns = []

html_theme = "sphinx_rtd_theme"

autodoc_inherit_docstrings = True
autoclass_content = "both"

external_readmes = ["README.md"]


def copy_docs(app):
    for rel_path in external_readmes:
        src = Path(app.confdir).parent / rel_path
        (Path(app.confdir) / rel_path).write_bytes(src.read_bytes())


def cleanup_docs(app, exception):
    for rel_path in external_readmes:
        path = Path(app.confdir) / rel_path
        if path.exists():
            path.unlink()


def setup(app):
    app.connect("builder-inited", copy_docs)
    app.connect("build-finished", cleanup_docs)
