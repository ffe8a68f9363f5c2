from flask_wtf import FlaskForm
from wtforms import IntegerField, SelectField, SubmitField, DateField
from wtforms.validators import DataRequired, Optional


class GroupForm(FlaskForm):
    group_id = IntegerField("グループ", validators=[DataRequired("グループを選択してください")])
    submit = SubmitField("更新")


class StageForm(FlaskForm):
    group_id = IntegerField("グループ", validators=[DataRequired("グループを選択してください")])
    job_posting_id = IntegerField("求人", validators=[Optional()])
    stage = SelectField(
        "選考ステップ",
        choices=[("document_screening", "書類選考"), ("first_interview", "一次面接"),
                 ("secondary_interview", "二次面接以降"), ("final_interview", "最終面接"),
                 ("offer", "内定")],
    )
    result = SelectField(
        "結果",
        choices=[("pass", "通過"), ("fail", "見送り"), ("accepted", "内定承諾"), ("declined", "内定辞退")],
    )
    submit = SubmitField("更新")


class ApplicationForm(FlaskForm):
    group_id = IntegerField("グループ", validators=[DataRequired("グループを選択してください")])
    job_posting_id = IntegerField("求人", validators=[Optional()])
    applied_at = DateField("応募日", format="%Y-%m-%d", validators=[Optional()])
    submit = SubmitField("登録")
