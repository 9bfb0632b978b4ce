import json

import pytest

from whitelist_mint import cli
from whitelist_mint.addresses import normalize
from whitelist_mint.whitelist import Whitelist


@pytest.fixture
def tokens_file(tmp_path, table):
    path = tmp_path / "tokens.json"
    path.write_text(json.dumps(table))
    return str(path)


def test_root(tokens_file, table, capsys):
    cli.main(["root", "--whitelist", tokens_file])
    out = capsys.readouterr().out
    assert out.strip() == f"Merkle Root: {Whitelist(table).hex_root}"


def test_root_keep_order(tokens_file, table, capsys):
    cli.main(["root", "--whitelist", tokens_file, "--keep-order"])
    out = capsys.readouterr().out
    assert Whitelist(table, sort_leaves=False).hex_root in out


def test_proof_with_solidity(tokens_file, table, addresses, capsys):
    cli.main(["proof", "--whitelist", tokens_file, addresses[1], "--solidity"])
    out = capsys.readouterr().out
    wl = Whitelist(table)
    assert f"Address {normalize(addresses[1])} is whitelisted: True" in out
    assert "Allowance: 3" in out
    assert "// Solidity" in out
    for p in wl.hex_proof_for(addresses[1]):
        assert p in out


def test_proof_for_unlisted_address(tokens_file, addresses):
    with pytest.raises(SystemExit) as exc:
        cli.main(["proof", "--whitelist", tokens_file, addresses[8]])
    assert "Not in tree" in str(exc.value)


def test_verify(table, addresses, capsys):
    wl = Whitelist(table)
    proof = json.dumps(wl.hex_proof_for(addresses[2]))
    cli.main(["verify", addresses[2], "5", wl.hex_root, "--proof", proof])
    assert "Valid: True" in capsys.readouterr().out


def test_verify_wrong_allowance_exits_nonzero(table, addresses, capsys):
    wl = Whitelist(table)
    proof = json.dumps(wl.hex_proof_for(addresses[2]))
    with pytest.raises(SystemExit) as exc:
        cli.main(["verify", addresses[2], "6", wl.hex_root, "--proof", proof])
    assert exc.value.code == 1
    assert "Valid: False" in capsys.readouterr().out


def test_export(tokens_file, table, tmp_path, capsys):
    out_file = tmp_path / "whitelist_data.json"
    cli.main(["export", "--whitelist", tokens_file, "--out", str(out_file)])
    data = json.loads(out_file.read_text())
    assert data["merkleRoot"] == Whitelist(table).hex_root
    assert data["count"] == len(table)
    assert "Saved:" in capsys.readouterr().out


def test_missing_table(tmp_path):
    with pytest.raises(SystemExit) as exc:
        cli.main(["root", "--whitelist", str(tmp_path / "missing.json")])
    assert "error:" in str(exc.value)
