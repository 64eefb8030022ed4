"""Rendering of wizard state.

Provides ``project``, the pure session-to-view projection, and
``ReceiptRenderer``, a Jinja2 plain-text renderer for the confirmation
summary and the success receipt.
"""

from redemption_wizard.render.projection import project, summarize
from redemption_wizard.render.receipt import ReceiptRenderer

__all__ = ["ReceiptRenderer", "project", "summarize"]
