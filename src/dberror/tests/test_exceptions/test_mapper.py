import pytest

from dberror.exceptions.base import StructuredError
from dberror.exceptions.codes import PostgresErrorCodes
from dberror.exceptions.diagnostics import PgDiagnostic
from dberror.exceptions.mapper import (
    ErrorTranslator,
    atranslate_errors,
    get_error,
    translate_errors,
)
from dberror.exceptions.registry import ConstraintHandler

from ..test_fixtures.driver_fixtures import (
    FakeAsyncpgError,
    FakePsycopg2Error,
    make_diag,
    wrap_in_sqlalchemy,
)

UUID = "3c7d2b4a-3fc8-4782-a518-4ce9efef51e7"


class TestPassThrough:

    def test_none_returns_none(self):
        assert get_error(None) is None

    @pytest.mark.parametrize("err", [ValueError("boom"), KeyError("id"), RuntimeError()])
    def test_non_database_error_returned_unchanged(self, err):
        assert get_error(err) is err

    def test_driver_error_without_sqlstate_returned_unchanged(self):
        # psycopg2 client-side errors (e.g. connection refused) have pgcode None
        err = FakePsycopg2Error(None, "could not connect to server")
        assert get_error(err) is err

    def test_structured_error_returned_unchanged(self):
        err = StructuredError("already friendly", code="23505")
        assert get_error(err) is err

    def test_driver_error_never_returned(self, unique_violation_psycopg2):
        result = get_error(unique_violation_psycopg2)
        assert isinstance(result, StructuredError)
        assert result is not unique_violation_psycopg2


class TestUniqueViolation:

    def test_column_and_value_extracted(self, unique_violation_psycopg2):
        err = get_error(unique_violation_psycopg2)

        assert err.message == f"A id already exists with this value ({UUID})"
        assert str(err) == err.message
        assert err.column == "id"
        assert err.code == "23505"
        assert err.table == "accounts"
        assert err.constraint == "accounts_pkey"
        assert err.severity == "ERROR"
        assert err.detail == f"Key (id)=({UUID}) already exists."

    def test_unparseable_detail_falls_back_to_value(self):
        diag = make_diag("23505", "duplicate key value violates unique constraint", detail="garbled")
        err = get_error(diag)

        assert err.message == "A value already exists with that value"
        assert err.column == ""

    def test_column_without_value(self):
        diag = make_diag("23505", "duplicate key", detail="Key (email)=")
        err = get_error(diag)

        assert err.message == "A email already exists with that value"
        assert err.column == "email"


class TestForeignKeyViolation:

    def test_insert_on_child_with_value(self):
        diag = make_diag(
            "23503",
            'insert or update on table "payments" violates foreign key constraint "payments_account_id_fkey"',
            detail='Key (account_id)=(91f47e99) is not present in table "accounts".',
            table="payments",
            constraint="payments_account_id_fkey",
            routine="ri_ReportViolation",
            severity="ERROR",
        )
        err = get_error(diag)

        assert err.message == (
            "Can't save to payments because the account_id (91f47e99) isn't present in the accounts table"
        )
        assert err.table == "payments"
        assert err.constraint == "payments_account_id_fkey"
        assert err.routine == "ri_ReportViolation"
        assert err.severity == "ERROR"

    def test_insert_on_child_without_value_or_table(self):
        diag = make_diag("23503", "insert or update on table violates foreign key", table="payments")
        err = get_error(diag)

        assert err.message == "Can't save to payments because the value isn't present in the parent table"

    def test_update_or_delete_on_parent(self):
        diag = make_diag(
            "23503",
            'update or delete on table "accounts" violates foreign key constraint '
            '"payments_account_id_fkey" on table "payments"',
            detail='Key (id)=(91f47e99) is still referenced from table "payments".',
            table="payments",
        )
        err = get_error(diag)

        assert err.message == (
            "Can't update or delete accounts records because the accounts id (91f47e99) "
            "is still referenced by the payments table"
        )

    def test_column_comes_from_driver(self):
        diag = make_diag("23503", "insert or update", column="account_id", table="payments")
        assert get_error(diag).column == "account_id"


class TestNumericValueOutOfRange:

    def test_message_rewritten_and_capitalized(self):
        diag = make_diag("22003", "integer out of range", severity="ERROR")
        err = get_error(diag)

        assert err.message == "Integer too large or too small"
        assert err.code == "22003"
        assert err.severity == "ERROR"

    def test_only_first_occurrence_replaced(self):
        diag = make_diag("22003", "value out of range: out of range")
        assert get_error(diag).message == "Value too large or too small: out of range"


class TestInvalidTextRepresentation:

    def test_missing_type_word_inserted(self):
        diag = make_diag("22P02", 'invalid input syntax for uuid: "foo"')
        assert get_error(diag).message == 'Invalid input syntax for type uuid: "foo"'

    def test_type_word_not_duplicated(self):
        diag = make_diag("22P02", 'invalid input syntax for type uuid: "foo"')
        assert get_error(diag).message == 'Invalid input syntax for type uuid: "foo"'

    def test_enum_phrase_stripped(self):
        diag = make_diag("22P02", 'invalid input value for enum account_status: "blah"')
        err = get_error(diag)

        assert err.message == 'Invalid account_status: "blah"'
        assert err.code == "22P02"


class TestNotNullViolation:

    def test_message_uses_driver_column(self, not_null_asyncpg):
        err = get_error(not_null_asyncpg)

        assert err.message == "No id was provided. Please provide a id"
        assert err.column == "id"
        assert err.table == "accounts"
        assert err.code == "23502"


class TestCheckViolation:

    def test_unregistered_constraint_passes_message_through(self, balance_check_diag, registry):
        err = get_error(balance_check_diag, registry)

        assert err.message == balance_check_diag.message
        assert err.constraint == "accounts_balance_check"
        assert err.table == "accounts"
        assert err.code == "23514"

    def test_registered_handler_result_returned(self, balance_check_diag, registry):
        built = []

        def build(diag):
            result = StructuredError(
                "Cannot write a negative balance",
                severity=diag.severity,
                table=diag.table,
                detail=diag.detail,
                code=diag.code,
            )
            built.append(result)
            return result

        registry.register(ConstraintHandler(name="accounts_balance_check", build=build))
        err = ErrorTranslator(registry).translate(balance_check_diag)

        assert err is built[0]
        assert err.message == "Cannot write a negative balance"
        assert err.table == "accounts"

    def test_handler_receives_normalized_error(self, registry):
        seen = []
        registry.register(
            ConstraintHandler(
                name="accounts_balance_check",
                build=lambda diag: seen.append(diag) or StructuredError("negative", code=diag.code),
            )
        )
        driver_err = FakeAsyncpgError(
            "23514", "new row violates check constraint", constraint_name="accounts_balance_check"
        )
        get_error(driver_err, registry)

        assert isinstance(seen[0], PgDiagnostic)
        assert seen[0].constraint == "accounts_balance_check"

    def test_failing_handler_falls_back(self, balance_check_diag, registry, dberror_caplog):
        def build(diag):
            raise RuntimeError("bug in handler")

        registry.register(ConstraintHandler(name="accounts_balance_check", build=build))
        err = get_error(balance_check_diag, registry)

        assert err.message == balance_check_diag.message
        assert "Constraint handler failed" in dberror_caplog.text

    def test_handler_returning_wrong_type_falls_back(self, balance_check_diag, registry):
        registry.register(ConstraintHandler(name="accounts_balance_check", build=lambda diag: "oops"))
        err = get_error(balance_check_diag, registry)

        assert isinstance(err, StructuredError)
        assert err.message == balance_check_diag.message


class TestGenericCodes:

    def test_lock_not_available_passes_through(self):
        diag = make_diag(
            "55P03", 'could not obtain lock on row in relation "accounts"',
            table="accounts", routine="heap_lock_tuple", severity="ERROR",
        )
        err = get_error(diag)

        assert err.message == 'could not obtain lock on row in relation "accounts"'
        assert err.code == PostgresErrorCodes.LOCK_NOT_AVAILABLE
        assert err.routine == "heap_lock_tuple"

    def test_unknown_code_passes_fields_through(self):
        diag = make_diag(
            "42P01", 'relation "acounts" does not exist',
            severity="ERROR", routine="parserOpenTable",
        )
        err = get_error(diag)

        assert isinstance(err, StructuredError)
        assert err.message == 'relation "acounts" does not exist'
        assert err.code == "42P01"
        assert err.routine == "parserOpenTable"

    def test_empty_driver_message_still_gives_message(self):
        err = get_error(make_diag("40001"))
        assert err.message == "Database error (SQLSTATE 40001)"


class TestSqlAlchemyWrapped:

    def test_integrity_error_is_unwrapped(self, unique_violation_psycopg2):
        err = get_error(wrap_in_sqlalchemy(unique_violation_psycopg2))

        assert isinstance(err, StructuredError)
        assert err.column == "id"

    def test_wrapped_non_postgres_error_returned_unchanged(self):
        wrapped = wrap_in_sqlalchemy(ValueError("sqlite says no"))
        assert get_error(wrapped) is wrapped


class TestTranslateErrors:

    def test_postgres_error_reraised_as_structured(self, not_null_asyncpg):
        with pytest.raises(StructuredError) as exc_info:
            with translate_errors():
                raise not_null_asyncpg

        assert exc_info.value.message == "No id was provided. Please provide a id"
        assert exc_info.value.__cause__ is not_null_asyncpg

    def test_other_errors_propagate_unchanged(self):
        with pytest.raises(KeyError):
            with translate_errors():
                raise KeyError("id")

    def test_no_error_no_effect(self):
        with translate_errors():
            value = 1
        assert value == 1

    @pytest.mark.asyncio
    async def test_async_variant(self, registry, balance_check_diag):
        registry.register(
            ConstraintHandler(
                name="accounts_balance_check",
                build=lambda diag: StructuredError("Cannot write a negative balance", code=diag.code),
            )
        )
        driver_err = FakeAsyncpgError(
            "23514", balance_check_diag.message, constraint_name="accounts_balance_check"
        )

        with pytest.raises(StructuredError) as exc_info:
            async with atranslate_errors(registry):
                raise driver_err

        assert exc_info.value.message == "Cannot write a negative balance"
