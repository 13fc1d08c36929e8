"""
Modelo de vista por campo.

``render_field`` traduce un campo y su valor a un ``FieldViewModel``
independiente de la UI. Hay un constructor por tipo de campo, registrado
en ``_RENDERERS``; la capa de presentación solo mira ``widget``.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from nexform.config import FieldType, FieldWidth
from nexform.core.coercion import is_truthy, parse_number, to_text
from nexform.core.schema import get_type_spec
from nexform.models.field import FormField


@dataclass
class FieldViewModel:
    """Datos listos para dibujar un campo."""
    field_id: str
    key: str
    label: str
    widget: str  # input, textarea, select, checkbox, tags, slider, ...
    value: Any = None
    input_type: Optional[str] = None  # Para widget "input"
    placeholder: Optional[str] = None
    help_text: Optional[str] = None
    required: bool = False
    read_only: bool = False
    disabled: bool = False
    options: list[str] = field(default_factory=list)
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    icon: Optional[str] = None
    width: str = FieldWidth.FULL.value
    attrs: dict[str, Any] = field(default_factory=dict)  # min, max, step, accept, ...


def _base(fld: FormField, value: Any, widget: str, read_only: bool) -> FieldViewModel:
    behavior = fld.behavior
    appearance = fld.appearance
    help_text = fld.help_text
    if help_text is None and not fld.required and get_type_spec(fld.type).carries_value:
        help_text = "(Optional)"
    return FieldViewModel(
        field_id=fld.id,
        key=fld.key,
        label=fld.label,
        widget=widget,
        value=value,
        placeholder=fld.placeholder or None,
        help_text=help_text,
        required=fld.required,
        read_only=read_only or bool(behavior and (behavior.read_only or behavior.calculation)),
        disabled=bool(behavior and behavior.disabled),
        prefix=appearance.prefix if appearance else None,
        suffix=appearance.suffix if appearance else None,
        icon=appearance.icon if appearance else None,
        width=FieldWidth(fld.layout.width).value,
    )


def _range_attrs(fld: FormField) -> dict[str, Any]:
    attrs: dict[str, Any] = {}
    if fld.validation is not None:
        if fld.validation.min is not None:
            attrs["min"] = fld.validation.min
        if fld.validation.max is not None:
            attrs["max"] = fld.validation.max
    return attrs


def _text_value(value: Any) -> str:
    return "" if value is None else to_text(value)


def _render_input(input_type: str) -> Callable[[FormField, Any, bool], FieldViewModel]:
    def render(fld: FormField, value: Any, read_only: bool) -> FieldViewModel:
        vm = _base(fld, _text_value(value), "input", read_only)
        vm.input_type = input_type
        if fld.validation is not None and fld.validation.pattern:
            vm.attrs["pattern"] = fld.validation.pattern
        if get_type_spec(fld.type).text_length:
            rng = _range_attrs(fld)
            if "min" in rng:
                vm.attrs["minlength"] = int(rng["min"])
            if "max" in rng:
                vm.attrs["maxlength"] = int(rng["max"])
        return vm
    return render


def _render_number(fld: FormField, value: Any, read_only: bool) -> FieldViewModel:
    num = parse_number(value)
    vm = _base(fld, num if num is not None else "", "input", read_only)
    vm.input_type = "number"
    vm.attrs.update(_range_attrs(fld))
    return vm


def _render_textarea(fld: FormField, value: Any, read_only: bool) -> FieldViewModel:
    vm = _base(fld, _text_value(value), "textarea", read_only)
    rng = _range_attrs(fld)
    if "max" in rng:
        vm.attrs["maxlength"] = int(rng["max"])
    return vm


def _render_select(fld: FormField, value: Any, read_only: bool) -> FieldViewModel:
    vm = _base(fld, _text_value(value), "select", read_only)
    vm.options = list(fld.options or [])
    if fld.data_source is not None:
        vm.attrs["dataSource"] = fld.data_source.to_dict()
    if vm.placeholder is None:
        vm.placeholder = "Select..."
    return vm


def _render_checkbox(fld: FormField, value: Any, read_only: bool) -> FieldViewModel:
    vm = _base(fld, is_truthy(value), "checkbox", read_only)
    vm.attrs["caption"] = fld.placeholder or "Yes"
    return vm


def _render_tags(fld: FormField, value: Any, read_only: bool) -> FieldViewModel:
    if value is None or value == "":
        tags = []
    elif isinstance(value, (list, tuple)):
        tags = [to_text(v) for v in value]
    else:
        tags = [t.strip() for t in to_text(value).split(",") if t.strip()]
    vm = _base(fld, tags, "tags", read_only)
    vm.options = list(fld.options or [])
    return vm


def _render_slider(fld: FormField, value: Any, read_only: bool) -> FieldViewModel:
    vm = _base(fld, parse_number(value), "slider", read_only)
    vm.attrs.update(_range_attrs(fld))
    vm.attrs.setdefault("min", 0)
    vm.attrs.setdefault("max", 100)
    if vm.value is None:
        vm.value = vm.attrs["min"]
    return vm


def _render_rating(fld: FormField, value: Any, read_only: bool) -> FieldViewModel:
    num = parse_number(value)
    vm = _base(fld, num or 0, "rating", read_only)
    rng = _range_attrs(fld)
    vm.attrs["max"] = int(rng.get("max", 5))
    return vm


def _render_file(fld: FormField, value: Any, read_only: bool) -> FieldViewModel:
    vm = _base(fld, value, "file", read_only)
    if fld.validation is not None:
        if fld.validation.accept:
            vm.attrs["accept"] = fld.validation.accept
        if fld.validation.max_size is not None:
            vm.attrs["maxSize"] = fld.validation.max_size
    return vm


def _render_simple(widget: str) -> Callable[[FormField, Any, bool], FieldViewModel]:
    def render(fld: FormField, value: Any, read_only: bool) -> FieldViewModel:
        return _base(fld, _text_value(value), widget, read_only)
    return render


def _render_divider(fld: FormField, value: Any, read_only: bool) -> FieldViewModel:
    vm = _base(fld, None, "separator", True)
    vm.help_text = fld.help_text
    return vm


_RENDERERS: dict[FieldType, Callable[[FormField, Any, bool], FieldViewModel]] = {
    FieldType.TEXT: _render_input("text"),
    FieldType.EMAIL: _render_input("email"),
    FieldType.PASSWORD: _render_input("password"),
    FieldType.NUMBER: _render_number,
    FieldType.TEXTAREA: _render_textarea,
    FieldType.SELECT: _render_select,
    FieldType.CHECKBOX: _render_checkbox,
    FieldType.TAGS: _render_tags,
    FieldType.SLIDER: _render_slider,
    FieldType.RATING: _render_rating,
    FieldType.COLOR: _render_simple("color"),
    FieldType.DATE: _render_simple("date"),
    FieldType.TIME: _render_simple("time"),
    FieldType.FILE: _render_file,
    FieldType.SIGNATURE: _render_simple("signature"),
    FieldType.RICH_TEXT: _render_simple("rich-text"),
    FieldType.DIVIDER: _render_divider,
}


def render_field(field: FormField, value: Any = None, read_only: bool = False) -> FieldViewModel:
    """
    Construye el modelo de vista de un campo.

    Args:
        field: Campo a dibujar
        value: Valor actual en el registro
        read_only: Fuerza solo lectura (vista previa, permisos)
    """
    return _RENDERERS[FieldType(field.type)](field, value, read_only)
