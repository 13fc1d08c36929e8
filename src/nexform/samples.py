"""Formularios de ejemplo."""

from nexform.models.definition import FormDefinition


def expense_form() -> FormDefinition:
    """Formulario de reembolso de gastos."""
    return FormDefinition.model_validate({
        "id": "form-expense",
        "name": "Expense Reimbursement",
        "description": "Standard travel and equipment expense claim form.",
        "version": 1,
        "fields": [
            {"id": "f1", "type": "text", "label": "Expense Title", "key": "title",
             "required": True, "placeholder": "e.g. Client Dinner"},
            {"id": "f2", "type": "number", "label": "Amount (USD)", "key": "amount",
             "required": True, "placeholder": "0.00"},
            {"id": "f3", "type": "date", "label": "Date Incurred", "key": "date", "required": True},
            {"id": "f4", "type": "select", "label": "Category", "key": "category", "required": True,
             "options": ["Travel", "Meals", "Software", "Equipment"]},
            {"id": "f5", "type": "textarea", "label": "Justification", "key": "reason",
             "required": False, "placeholder": "Why was this expense necessary?"},
        ],
    })


def onboarding_form() -> FormDefinition:
    """Formulario de alta de empleados."""
    return FormDefinition.model_validate({
        "id": "form-onboarding",
        "name": "Employee Onboarding",
        "description": "IT provisioning and access setup for new hires.",
        "version": 1,
        "fields": [
            {"id": "f1", "type": "text", "label": "Legal Name", "key": "employeeName", "required": True},
            {"id": "f2", "type": "select", "label": "Department", "key": "dept", "required": True,
             "options": ["Engineering", "Sales", "HR", "Finance"]},
            {"id": "f3", "type": "checkbox", "label": "Requires Laptop?", "key": "needsLaptop", "required": False},
            {"id": "f4", "type": "checkbox", "label": "Requires VPN?", "key": "needsVPN", "required": False},
            {"id": "f5", "type": "select", "label": "Access Level", "key": "accessLevel", "required": True,
             "options": ["Standard", "Admin", "ReadOnly"]},
        ],
    })


SAMPLES = {
    "expense": expense_form,
    "onboarding": onboarding_form,
}


def get_sample(name: str) -> FormDefinition:
    """Obtiene un formulario de ejemplo por nombre."""
    try:
        return SAMPLES[name]()
    except KeyError:
        raise ValueError(f"Ejemplo desconocido: {name} (disponibles: {', '.join(SAMPLES)})") from None
