"""
ItemForm - description of the item create/edit form.

The generic item form is built elsewhere; resource types add their own
elements, rules and notes to it. The result serializes to JSON for clients
and validates submissions server side.
"""

from pathlib import PurePath
from typing import Any, Optional

from pydantic import BaseModel, Field

from ..services.fs import UploadHandle


class FormElement(BaseModel):
    """A single input of the item form."""

    kind: str = Field(..., description="Input kind (text, url, filepicker, html, ...)")
    name: str = Field(..., description="Submitted field / property name")
    label: Optional[str] = Field(default=None, description="Human-readable label")
    help: Optional[str] = Field(default=None, description="Help text shown next to the input")
    options: dict[str, Any] = Field(default_factory=dict, description="Kind-specific options")


class ItemForm(BaseModel):
    """Elements, validation rules and informational notes of an item form."""

    elements: list[FormElement] = Field(default_factory=list)
    rules: dict[str, list[str]] = Field(default_factory=dict)
    notes: list[str] = Field(default_factory=list)

    def add_element(
        self,
        kind: str,
        name: str,
        label: str | None = None,
        help: str | None = None,
        **options: Any,
    ) -> FormElement:
        element = FormElement(kind=kind, name=name, label=label, help=help, options=options)
        self.elements.append(element)
        return element

    def add_rule(self, name: str, rule: str) -> None:
        """Attach a validation rule ("required", "url") to a field."""
        rules = self.rules.setdefault(name, [])
        if rule not in rules:
            rules.append(rule)

    def add_note(self, html: str) -> None:
        """Add informational markup shown above the type-specific inputs."""
        self.notes.append(html)

    def get_element(self, name: str) -> FormElement | None:
        return next((e for e in self.elements if e.name == name), None)

    def is_required(self, name: str) -> bool:
        return "required" in self.rules.get(name, [])

    def validate_submission(
        self, data: dict[str, Any], upload: UploadHandle | None = None
    ) -> dict[str, str]:
        """
        Check submitted data and uploads against the form's rules.

        Returns:
            Field name -> error message; empty when the submission is valid
        """
        errors: dict[str, str] = {}
        for element in self.elements:
            name = element.name
            if element.kind == "filepicker":
                provided = upload is not None and upload.has_content(name)
                if provided:
                    error = _check_accepted_types(element, upload.get_filename(name))
                    if error:
                        errors[name] = error
            else:
                value = data.get(name)
                provided = value not in (None, "")
                maxlength = element.options.get("maxlength")
                if provided and maxlength and len(str(value)) > maxlength:
                    errors[name] = f"Must be at most {maxlength} characters"
                if provided and "url" in self.rules.get(name, []) and not _looks_like_url(str(value)):
                    errors[name] = "Must be an http(s) URL"
                choices = element.options.get("choices")
                if provided and choices:
                    chosen = value if isinstance(value, list) else [value]
                    unknown = [v for v in chosen if v not in choices]
                    if unknown:
                        errors[name] = f"Unknown choice: {', '.join(map(str, unknown))}"
                if isinstance(value, list) and not value:
                    provided = False

            if not provided and self.is_required(name):
                errors[name] = "Required"

        return errors


def _check_accepted_types(element: FormElement, filename: str | None) -> str | None:
    accepted = element.options.get("accepted_types")
    if not accepted or not filename:
        return None
    suffix = PurePath(filename).suffix.lower()
    if suffix not in [a.lower() for a in accepted]:
        return f"Accepted file types: {', '.join(accepted)}"
    return None


def _looks_like_url(value: str) -> bool:
    return value.startswith(("http://", "https://"))
