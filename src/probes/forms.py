"""Form usability probe: label association, required fields, placeholders."""

from src.auditor.session import AuditSession
from src.models.audit_models import CheckStatus, Severity
from src.probes.base import BaseProbe

FORM_ANALYSIS_JS = """
() => {
    const inputs = Array.from(document.querySelectorAll('input, textarea, select'));
    const labelled = inputs.filter(input =>
        input.id && document.querySelector(`label[for="${input.id}"]`) !== null);
    const required = inputs.filter(input =>
        input.hasAttribute('required') || input.getAttribute('aria-required') === 'true');
    const withPlaceholder = inputs.filter(input => {
        const placeholder = input.getAttribute('placeholder');
        return placeholder !== null && placeholder !== '';
    });
    return {
        form_count: document.querySelectorAll('form').length,
        input_count: inputs.length,
        labelled_count: labelled.length,
        required_count: required.length,
        placeholder_count: withPlaceholder.length,
    };
}
"""


def label_score(labelled: int, total: int) -> int:
    if labelled == total:
        return 10
    return 5 if labelled > 0 else 0


class FormsProbe(BaseProbe):
    name = "Forms"
    category = "Forms"
    toggle = "forms"

    async def run(self, session: AuditSession) -> None:
        analysis = await session.page.evaluate(FORM_ANALYSIS_JS)

        if analysis["form_count"] == 0:
            session.add_result(
                self.category,
                "Form Existence",
                CheckStatus.PASS,
                10,
                "No forms found on this page",
                Severity.LOW,
            )
            return

        inputs = analysis["input_count"]
        labelled = analysis["labelled_count"]
        session.add_result(
            self.category,
            "Input Labels",
            CheckStatus.PASS if labelled == inputs else CheckStatus.FAIL,
            label_score(labelled, inputs),
            f"{labelled} out of {inputs} inputs have associated labels",
            Severity.HIGH if labelled < inputs else Severity.LOW,
        )

        session.add_result(
            self.category,
            "Required Fields",
            CheckStatus.PASS,
            10,
            f"{analysis['required_count']} required fields marked",
            Severity.LOW,
        )

        placeholders = analysis["placeholder_count"]
        session.add_result(
            self.category,
            "Placeholder Text",
            CheckStatus.PASS if placeholders > 0 else CheckStatus.WARNING,
            10 if placeholders > 0 else 7,
            f"{placeholders} inputs have placeholder text",
            Severity.LOW,
        )
