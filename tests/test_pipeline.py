from rscodec.model.pipeline import main


def test_encode_then_decode_files(tmp_path, capsys):
    cw_path = tmp_path / "cw.bin"
    assert main(["encode", "--text", "HELLO", "--n", "26", "--k", "10", "--out", str(cw_path)]) == 0
    codeword = cw_path.read_bytes()
    assert len(codeword) == 26
    assert codeword[:10] == b"HELLO" + bytes(5)
    assert "RS(26,10) output (size = 26)" in capsys.readouterr().out

    corrupted = bytearray(codeword)
    corrupted[0] ^= 0xFF
    corrupted[15] ^= 0x01
    bad_path = tmp_path / "bad.bin"
    bad_path.write_bytes(bytes(corrupted))

    data_path = tmp_path / "data.bin"
    assert main(["decode", "--infile", str(bad_path), "--n", "26", "--k", "10", "--out", str(data_path)]) == 0
    out = capsys.readouterr().out
    assert "status = repaired" in out
    assert "corrected bytes = 2" in out
    assert "restored ascii = 'HELLO'" in out
    assert data_path.read_bytes() == b"HELLO" + bytes(5)


def test_decode_clean_hex(capsys):
    assert main(["encode", "--hex", "00 01 02", "--n", "8", "--k", "3"]) == 0
    lines = capsys.readouterr().out.splitlines()
    dump_line = lines[lines.index("RS(8,3) output (size = 8) =") + 1]
    assert dump_line.startswith("00000000: ")
    codeword_hex = dump_line.split(": ", 1)[1]
    assert main(["decode", "--hex", codeword_hex, "--n", "8", "--k", "3"]) == 0
    assert "status = clean" in capsys.readouterr().out


def test_uncorrectable_block_exit_code(tmp_path, capsys):
    cw_path = tmp_path / "cw.bin"
    assert main(["encode", "--text", "AB", "--n", "6", "--k", "2", "--out", str(cw_path)]) == 0
    corrupted = bytearray(cw_path.read_bytes())
    for i in range(4):
        corrupted[i] ^= 0x33 + i
    cw_path.write_bytes(bytes(corrupted))
    rc = main(["decode", "--infile", str(cw_path), "--n", "6", "--k", "2"])
    captured = capsys.readouterr()
    assert rc == 1
    assert "status = uncorrectable" in captured.out
    assert "uncorrectable" in captured.err


def test_size_errors(capsys):
    assert main(["encode", "--text", "X" * 11, "--n", "26", "--k", "10"]) == 2
    assert main(["decode", "--hex", "0011", "--n", "26", "--k", "10"]) == 2
    assert main(["encode", "--text", "X", "--n", "10", "--k", "10"]) == 2
    assert "Error" in capsys.readouterr().err
