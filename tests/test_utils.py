from stmtguard.utils import statement_type


def test_statement_types():
    assert statement_type("SELECT 1;") == "SELECT"
    assert statement_type("-- hint\nINSERT INTO t VALUES (1);") == "INSERT"
    assert statement_type("CREATE TABLE t (a int);") == "CREATE"


def test_unknown_statement():
    assert statement_type("") == "UNKNOWN"
