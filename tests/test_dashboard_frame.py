from dashboard.streamlit_app import HOLDER_COLUMNS, holders_frame


def test_holders_frame_rows():
    body = {"holders": [
        {"owner": "So11111111111111111111111111111111111111112", "amountRaw": "1250000", "decimals": 6, "uiAmount": "1.25"},
        {"owner": "walletY", "amountRaw": "5", "decimals": 6, "uiAmount": "0.000005"},
    ]}
    df = holders_frame(body)
    assert list(df.columns) == HOLDER_COLUMNS
    assert df["rank"].tolist() == [1, 2]
    assert df["amount"].tolist() == ["1.25", "0.00"]
    assert df["owner_short"].tolist()[0] == "So1111…1112"


def test_holders_frame_empty():
    df = holders_frame({"holders": []})
    assert df.empty
    assert list(df.columns) == HOLDER_COLUMNS
