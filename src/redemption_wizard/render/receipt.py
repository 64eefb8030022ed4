"""ReceiptRenderer — Jinja2 plain-text rendering of a :class:`WizardView`.

Two templates:
  - ``summary.jinja2``: the step 3 "confirm your data" block
  - ``receipt.jinja2``: the success receipt with the protocol code

Both only ever see the masked key from the view.
"""

from __future__ import annotations

from pathlib import Path

import jinja2

from redemption_wizard.models.enums import StepId
from redemption_wizard.models.view import WizardView


class ReceiptRenderer:
    """Renders summaries and receipts as plain text.

    Args:
        template_dir: optional override for the template directory.
            Defaults to ``template/`` sibling of this module.
    """

    def __init__(self, template_dir: Path | None = None) -> None:
        if template_dir is None:
            template_dir = Path(__file__).parent / "template"
        self._env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,
            undefined=jinja2.StrictUndefined,
        )

    def render_summary(self, view: WizardView) -> str:
        return self._env.get_template("summary.jinja2").render(view=view)

    def render_receipt(self, view: WizardView) -> str:
        """Render the success receipt.  Raises ``ValueError`` before completion."""
        completion = view.simulation.completion
        if view.step is not StepId.SUCCESS or completion is None:
            raise ValueError(
                f"Receipt is only valid after completion: session_id={view.session_id}"
            )
        return self._env.get_template("receipt.jinja2").render(view=view, completion=completion)

    def render(self, view: WizardView) -> str:
        """Receipt once completed, otherwise the confirmation summary."""
        if view.step is StepId.SUCCESS and view.simulation.completion is not None:
            return self.render_receipt(view)
        return self.render_summary(view)
