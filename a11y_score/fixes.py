"""Remediation hints per issue type."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FixSuggestion:
    """Short remediation hint."""

    title: str
    explanation: str

    def to_dict(self) -> dict[str, str]:
        return {"title": self.title, "explanation": self.explanation}


FIX_SUGGESTIONS: dict[str, FixSuggestion] = {
    "Missing Alt Text": FixSuggestion(
        "Add an alt attribute",
        'Describe what the image shows. If decorative, use alt="".',
    ),
    "Empty Link": FixSuggestion(
        "Add accessible text to the link",
        "Add aria-label to the <a> tag, or add visible text inside the link.",
    ),
    "Misplaced Accessible Name": FixSuggestion(
        "Move aria-label to the parent link",
        "Move the aria-label from the child element to the <a> tag itself.",
    ),
    "Input Without Label": FixSuggestion(
        "Add a label element",
        "Use a <label> tag with matching for/id attributes, or add aria-label to the input.",
    ),
    "Missing Language Attribute": FixSuggestion(
        "Add lang attribute to html",
        'Specify the page language (e.g., "en" for English, "es" for Spanish).',
    ),
    "Button Without Accessible Name": FixSuggestion(
        "Add text or aria-label",
        "Add visible text inside the button, or use aria-label for icon-only buttons.",
    ),
    "Missing H1": FixSuggestion(
        "Add an H1 heading to the page",
        "Every page should have exactly one H1 that describes the main content.",
    ),
    "Multiple H1s": FixSuggestion(
        "Use only one H1 per page",
        "Keep only one H1 for the main page title. Convert others to H2-H6.",
    ),
    "Skipped Heading Level": FixSuggestion(
        "Fix heading hierarchy",
        "Don't skip heading levels. Go from H2 to H3 to H4, not H2 to H4.",
    ),
    "Missing Page Title": FixSuggestion(
        "Add a descriptive <title> element",
        "Every page needs a unique, descriptive title. Screen readers announce it on load.",
    ),
    "Missing Main Landmark": FixSuggestion(
        "Wrap primary content in <main>",
        'The <main> element (or role="main") lets screen reader users jump to primary content.',
    ),
    "Missing Navigation Landmark": FixSuggestion(
        "Wrap navigation links in <nav>",
        "Use <nav> for groups of navigation links. Add aria-label when there are several.",
    ),
    "Multiple Main Landmarks": FixSuggestion(
        "Use only one <main> landmark per page",
        "Use <section> or <article> for additional content regions.",
    ),
    "Positive Tabindex": FixSuggestion(
        "Remove positive tabindex values",
        "Positive tabindex values override the natural tab order. Use 0 or -1 only.",
    ),
    "Keyboard Inaccessible Element": FixSuggestion(
        "Make interactive elements keyboard accessible",
        "Elements with click handlers must be reachable and operable via keyboard. "
        "Prefer native <button> and <a> elements.",
    ),
    "Low Color Contrast": FixSuggestion(
        "Increase text color contrast",
        "Normal text needs a contrast ratio of at least 4.5:1; large text needs 3:1.",
    ),
    "Suspicious Empty Alt Text": FixSuggestion(
        'Check if decorative alt="" is correct',
        'Images with alt="" are hidden from screen readers. Informative or linked images '
        "need descriptive alt text.",
    ),
    "Focusable Element Removed from Tab Order": FixSuggestion(
        'Avoid tabindex="-1" on interactive elements',
        'tabindex="-1" makes buttons and links unreachable by keyboard unless focus is '
        "managed programmatically.",
    ),
    "Custom Widget Missing Tabindex": FixSuggestion(
        'Add tabindex="0" to custom interactive widgets',
        "Elements with interactive ARIA roles must be keyboard focusable. Use tabindex=\"0\" "
        "or a roving tabindex.",
    ),
    "Missing aria-expanded on Toggle": FixSuggestion(
        "Add aria-expanded to toggle buttons",
        'Buttons that show or hide content must expose state via aria-expanded="true/false".',
    ),
    "Dialog Missing Focus Management": FixSuggestion(
        "Add focus management attributes to dialogs",
        "Dialogs must trap focus while open and return focus to the trigger when closed.",
    ),
    "Custom Dropdown Missing Keyboard Support": FixSuggestion(
        "Implement keyboard pattern for custom dropdowns",
        "Listbox and combobox widgets need Enter/Space to select, Escape to close and "
        "arrow-key navigation.",
    ),
    "Missing Keyboard Handler on Interactive Element": FixSuggestion(
        "Add keyboard event handlers alongside click handlers",
        "Custom interactive elements need both click and keyboard handlers.",
    ),
}


def fix_for(issue_type: str) -> FixSuggestion | None:
    """Return the remediation hint for ``issue_type`` if one exists."""
    return FIX_SUGGESTIONS.get(issue_type)
