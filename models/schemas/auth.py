from marshmallow import Schema, fields, pre_load, validate

from models.schemas.user import PASSWORD_MIN_LENGTH


class LoginSchema(Schema):
    email = fields.Email(required=True)
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=PASSWORD_MIN_LENGTH))

    @pre_load
    def normalize(self, data, **kwargs):
        if isinstance(data, dict) and isinstance(data.get("email"), str):
            data = dict(data)
            data["email"] = data["email"].strip()
        return data


class LogoutSchema(Schema):
    refresh_token = fields.String(required=True, data_key="refreshToken", validate=validate.Length(min=1))


class LoginOutSchema(Schema):
    token = fields.String()
    # omitted when refresh tokens are disabled
    refresh_token = fields.String(data_key="refreshToken")
