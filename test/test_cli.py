from io import StringIO

import pytest

from threaded_range_product.cli import main


def run_main(argv, stdin_text=""):
    stdout = StringIO()
    stderr = StringIO()
    status = main(argv, stdin=StringIO(stdin_text), stdout=stdout, stderr=stderr)
    return status, stdout.getvalue(), stderr.getvalue()


def test_arguments():
    status, stdout, _ = run_main(["4", "1", "11"])
    assert status == 0
    assert stdout == "Result: 3628800\n"


def test_prompts():
    status, stdout, _ = run_main([], stdin_text="4\n1\n11\n")
    assert status == 0
    assert stdout == "Thread count: Start number: End number: Result: 3628800\n"


def test_options():
    status, stdout, _ = run_main(
        ["4", "1", "11", "--overshoot", "--int-width", "32", "--executor"]
    )
    assert status == 0
    assert stdout == "Result: 479001600\n"


def test_invalid_thread_count():
    status, stdout, stderr = run_main(["0", "1", "11"])
    assert status == 2
    assert "Result" not in stdout
    assert "num_computing_threads" in stderr


def test_malformed_prompt_input():
    status, stdout, stderr = run_main([], stdin_text="4\none\n11\n")
    assert status == 2
    assert "Result" not in stdout
    assert "invalid integer" in stderr

    status, stdout, stderr = run_main([], stdin_text="4\n")
    assert status == 2
    assert "end of input" in stderr


def test_malformed_arguments():
    with pytest.raises(SystemExit) as error:
        run_main(["4", "x", "11"])
    assert error.value.code == 2
    with pytest.raises(SystemExit) as error:
        run_main(["4", "1"])
    assert error.value.code == 2


def test_numbers_out_of_int_width():
    status, stdout, stderr = run_main(
        ["2", "2147483648", "2147483651", "--int-width", "32"]
    )
    assert status == 2
    assert "Result" not in stdout
    assert "out of the range of 32 bit integers" in stderr
