"""Custom exceptions for the rendering context."""

from pathlib import Path
from typing import List, Optional


class TemplateValidationError(ValueError):
    """
    Raised while building a template catalog when a skin breaks the contract.

    This is a packaging defect (a broken skin on disk), never a content
    problem: rendering itself does not raise.

    Attributes:
        message: Error description
        template_id: Offending skin, when known
        issues: Every problem found, one per entry
        skin_path: Skin directory on disk, when loaded from files
    """

    def __init__(
        self,
        message: str,
        template_id: Optional[str] = None,
        issues: Optional[List[str]] = None,
        skin_path: Optional[Path] = None,
    ):
        self.message = message
        self.template_id = template_id
        self.issues = list(issues or [])
        self.skin_path = skin_path

        parts = [message]

        if template_id:
            parts.append(f"Template: {template_id}")
        if skin_path:
            parts.append(f"Skin directory: {skin_path}")
        for issue in self.issues:
            parts.append(f"  - {issue}")

        super().__init__("\n".join(parts))
