import logging
from pathlib import Path

import pytest

from hackasm.cli import build_arg_parser, main
from hackasm.config import AssemblerConfig


def test_writes_hack_file_next_to_input(write_asm, max_source, max_binary):
    source = write_asm(max_source, "Max.asm")
    assert main(["-i", str(source)]) == 0
    output = source.with_name("Max.hack")
    assert output.read_text(encoding="utf-8") == max_binary


def test_rerun_overwrites_with_identical_output(write_asm, max_source):
    source = write_asm(max_source, "Max.asm")
    main(["--input", str(source)])
    first = source.with_suffix(".hack").read_bytes()
    main(["--input", str(source)])
    assert source.with_suffix(".hack").read_bytes() == first


def test_invalid_program_writes_nothing(write_asm, caplog):
    source = write_asm("@1\nD=M\nnonsense\n", "Bad.asm")
    with caplog.at_level(logging.ERROR):
        assert main(["-i", str(source)]) == 1
    assert not source.with_suffix(".hack").exists()
    assert "Invalid instruction: nonsense" in caplog.text


def test_unknown_mnemonic_is_reported(write_asm, caplog):
    source = write_asm("0;JUMP\n", "Bad.asm")
    with caplog.at_level(logging.ERROR):
        assert main(["-i", str(source)]) == 1
    assert "Unknown jump mnemonic: JUMP" in caplog.text


def test_missing_input_file(tmp_path: Path, caplog):
    with caplog.at_level(logging.ERROR):
        assert main(["-i", str(tmp_path / "missing.asm")]) == 1
    assert "I/O failure" in caplog.text


def test_input_option_is_required():
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 2


@pytest.mark.parametrize(
    "argv,level",
    [([], logging.WARNING), (["-v"], logging.INFO), (["-vv"], logging.DEBUG), (["-vvv"], logging.DEBUG)],
)
def test_verbosity_maps_to_log_level(argv, level):
    args = build_arg_parser().parse_args(["-i", "prog.asm", *argv])
    assert AssemblerConfig.from_args(args).log_level == level


@pytest.mark.parametrize(
    "input_path,output_path",
    [("prog/Max.asm", "prog/Max.hack"), ("Pong", "Pong.hack"), ("a.b/Rect.asm", "a.b/Rect.hack")],
)
def test_output_path_replaces_extension(input_path, output_path):
    config = AssemblerConfig(input_path=Path(input_path))
    assert config.output_path == Path(output_path)


def test_undecodable_source_is_reported(tmp_path: Path, caplog):
    source = tmp_path / "Latin1.asm"
    source.write_bytes(b"@1\nD=M // caf\xe9\n")
    with caplog.at_level(logging.ERROR):
        assert main(["-i", str(source)]) == 1
    assert "I/O failure" in caplog.text
    assert not source.with_suffix(".hack").exists()


def test_source_with_byte_order_mark(tmp_path: Path):
    source = tmp_path / "Bom.asm"
    source.write_bytes(b"\xef\xbb\xbf// header\n@1\n")
    assert main(["-i", str(source)]) == 0
    assert source.with_suffix(".hack").read_text(encoding="utf-8") == "0000000000000001\n"


def test_unwritable_output_is_reported(write_asm, caplog):
    source = write_asm("@1\n", "Blocked.asm")
    source.with_suffix(".hack").mkdir()
    with caplog.at_level(logging.ERROR):
        assert main(["-i", str(source)]) == 1
    assert "I/O failure" in caplog.text
    assert source.with_suffix(".hack").is_dir()
