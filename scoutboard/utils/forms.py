from flask import request
from werkzeug.datastructures import MultiDict

from ..errors import ValidationError


def json_object():
    """The request's JSON body as a dict; ``{}`` when there is none."""
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError("リクエストの形式が不正です")
    return body


def _formdata():
    # nulls mean "not given"; WTForms only copes with strings
    data = MultiDict()
    for key, value in json_object().items():
        values = value if isinstance(value, (list, tuple)) else [value]
        for v in values:
            if v is not None:
                data.add(key, str(v))
    return data


def validate_or_raise(form_class):
    """Build and validate a FlaskForm; the first field error becomes a ValidationError."""
    form = form_class(formdata=_formdata()) if request.is_json else form_class()
    if form.validate_on_submit():
        return form
    for name, errors in form.errors.items():
        if errors:
            raise ValidationError(str(errors[0]), field=name)
    raise ValidationError()
