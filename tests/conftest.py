"""
Shared fixtures.

Config is a process-wide singleton that reads ~/.sheetexport/config.yaml
and SHEETEXPORT_* variables. Every test gets a fresh instance pointed at
tmp_path instead, so nothing on the developer's machine leaks in.
"""

import os

import pytest

from sheetexport.io.config import Config


@pytest.fixture(autouse=True)
def config(tmp_path, monkeypatch):
    for key in list(os.environ):
        if key.startswith("SHEETEXPORT_"):
            monkeypatch.delenv(key)

    Config.reset()
    cfg = Config(tmp_path / "config.yaml")
    yield cfg
    Config.reset()


@pytest.fixture
def product_csv():
    """Product list with Japanese text, quoted commas and leading zeros."""
    return (
        '"製品名","カテゴリ","価格","在庫数","商品コード"\r\n'
        '"高性能ノートPC","コンピュータ",150000,50,"PC-001"\r\n'
        '"ワイヤレスマウス","アクセサリ",3500,"200","AC-055"\r\n'
        '"4Kモニター, 27インチ","ディスプレイ",45000,30,"DP-300"\r\n'
        '"00123","テスト",100,10,"00123"\r\n'
    )
