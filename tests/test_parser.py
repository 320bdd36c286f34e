import pytest

from osh.exceptions import ShellSyntaxError, TooManyArgumentsError
from osh.lexer import Lexer
from osh.parser import ParseStatus, Parser, parse_line


def test_single_stage_keeps_word_order():
    result = parse_line("ls -l -a /tmp")
    assert result.status is ParseStatus.READY
    assert result.command.argv == ["ls", "-l", "-a", "/tmp"]
    assert result.command.exec_args() == ["ls", "-l", "-a", "/tmp"]
    assert result.command.predecessor is None


def test_blank_input_is_empty():
    assert parse_line("").status is ParseStatus.EMPTY
    assert parse_line("   \t").status is ParseStatus.EMPTY


def test_trailing_ampersand_sets_background():
    command = parse_line("sleep 5 &").command
    assert command.background is True
    assert command.argv == ["sleep", "5"]


def test_ampersand_must_be_last():
    assert parse_line("sleep 5 & echo hi").status is ParseStatus.SYNTAX_ERROR
    assert parse_line("sleep 5 & &").status is ParseStatus.SYNTAX_ERROR


def test_ampersand_alone_is_syntax_error():
    assert parse_line("&").status is ParseStatus.SYNTAX_ERROR


def test_argument_cap():
    assert parse_line(" ".join(["w"] * 40)).status is ParseStatus.READY
    result = parse_line(" ".join(["w"] * 41))
    assert result.status is ParseStatus.TOO_MANY_ARGUMENTS
    assert result.command is None


def test_argument_cap_is_per_stage():
    line = " ".join(["a"] * 3) + " | " + " ".join(["b"] * 3)
    assert parse_line(line, max_args=3).status is ParseStatus.READY
    with pytest.raises(TooManyArgumentsError):
        Parser(Lexer("a b c d"), max_args=3).parse()


def test_history_alone():
    command = parse_line("  !!  ").command
    assert command.uses_history is True
    assert command.argv == []


def test_history_with_trailing_tokens_is_rejected():
    assert parse_line("!! ls").status is ParseStatus.SYNTAX_ERROR
    assert parse_line("ls !!").status is ParseStatus.SYNTAX_ERROR


def test_pipeline_head_is_rightmost_stage():
    head = parse_line("a 1 | b 2 | c 3").command
    assert head.argv == ["c", "3"]
    assert head.predecessor.argv == ["b", "2"]
    assert head.predecessor.predecessor.argv == ["a", "1"]
    assert head.predecessor.predecessor.predecessor is None
    assert [stage.name for stage in head.stages()] == ["a", "b", "c"]


def test_redirections_attach_to_their_stage():
    command = parse_line("sort < in.txt > out.txt").command
    assert command.argv == ["sort"]
    assert command.stdin == "in.txt"
    assert command.stdout == "out.txt"


def test_redirect_requires_a_word():
    for line in ("cat <", "cat > | wc", "cat > &", "cat < > x"):
        assert parse_line(line).status is ParseStatus.SYNTAX_ERROR, line


def test_duplicate_redirections_are_rejected():
    assert parse_line("cat < a < b").status is ParseStatus.SYNTAX_ERROR
    assert parse_line("cat > a > b").status is ParseStatus.SYNTAX_ERROR


def test_output_redirect_on_last_stage_is_allowed():
    head = parse_line("cmd1 | cmd2 > out.txt").command
    assert head.stdout == "out.txt"
    assert head.predecessor.stdout is None


def test_output_redirect_before_pipe_is_rejected():
    assert parse_line("cmd1 > out.txt | cmd2").status is ParseStatus.SYNTAX_ERROR
    assert parse_line("cmd1 | cmd2 > out.txt | cmd3").status is ParseStatus.SYNTAX_ERROR


def test_input_redirect_on_first_stage_is_allowed():
    head = parse_line("cmd < in.txt | cmd2").command
    assert head.predecessor.stdin == "in.txt"
    assert head.stdin is None


def test_input_redirect_after_pipe_is_rejected():
    with pytest.raises(ShellSyntaxError) as exc:
        Parser(Lexer("cmd1 | cmd2 < in.txt")).parse()
    assert "pipe" in str(exc.value)


def test_empty_pipeline_stages_are_rejected():
    for line in ("| wc", "ls |", "ls | | wc", "ls | &", "> out.txt", "ls | > out"):
        assert parse_line(line).status is ParseStatus.SYNTAX_ERROR, line


def test_background_pipeline_flags_only_the_head():
    head = parse_line("ls | wc -l &").command
    assert head.background is True
    assert head.predecessor.background is False


def test_syntax_error_reports_position():
    with pytest.raises(ShellSyntaxError) as exc:
        Parser(Lexer("ls > ")).parse()
    assert exc.value.position == 5


def test_embedded_nul_is_rejected():
    assert parse_line("echo a\x00b").status is ParseStatus.SYNTAX_ERROR
    assert parse_line("cat < x\x00y").status is ParseStatus.SYNTAX_ERROR
    with pytest.raises(ShellSyntaxError) as exc:
        Parser(Lexer("echo a\x00b")).parse()
    assert exc.value.position == 6
