from flask_wtf import FlaskForm
from wtforms import IntegerField, StringField, SubmitField
from wtforms.validators import DataRequired, Length


class SaveSearchForm(FlaskForm):
    group_id = IntegerField("グループ", validators=[DataRequired("グループを選択してください")])
    name = StringField(
        "検索条件名",
        validators=[DataRequired("保存する検索条件の名前を入力してください"), Length(max=200)],
    )
    submit = SubmitField("保存")


class RenameSearchForm(FlaskForm):
    name = StringField(
        "検索条件名",
        validators=[DataRequired("保存する検索条件の名前を入力してください"), Length(max=200)],
    )
    submit = SubmitField("変更")
