from sqlalchemy.dialects import mysql, postgresql

from closer_crm.domain.users.repository import _percent_expr
from closer_crm.models import User


def compiled(dialect):
    return str(_percent_expr(User.achieved, User.objective).compile(dialect=dialect))


def test_percent_cast_has_no_precision_cap_on_postgresql():
    sql = compiled(postgresql.dialect())
    assert "AS NUMERIC)" in sql
    assert "NUMERIC(" not in sql


def test_percent_cast_keeps_decimals_on_mysql():
    assert "AS DECIMAL(65, 4))" in compiled(mysql.dialect())
