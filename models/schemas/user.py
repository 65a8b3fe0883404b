from marshmallow import Schema, fields, pre_load, validate

PASSWORD_MIN_LENGTH = 6


def _strip(v):
    return v.strip() if isinstance(v, str) else v


class UserCreateSchema(Schema):
    first_name = fields.String(required=True, data_key="firstName", validate=validate.Length(min=1, max=100))
    last_name = fields.String(required=True, data_key="lastName", validate=validate.Length(min=1, max=100))
    email = fields.Email(required=True, validate=validate.Length(max=255))
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=PASSWORD_MIN_LENGTH))

    @pre_load
    def normalize(self, data, **kwargs):
        if isinstance(data, dict):
            data = dict(data)
            for key in ("firstName", "lastName", "email"):
                if key in data:
                    data[key] = _strip(data[key])
        return data


class UserOutSchema(Schema):
    id = fields.String(allow_none=False)
    first_name = fields.String(data_key="firstName")
    last_name = fields.String(data_key="lastName")
    email = fields.String()
