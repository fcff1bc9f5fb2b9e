from holderscan.pages import FlatResult, Owners, Unrecognized, parse_page


def test_owners_shape():
    page = parse_page(
        {
            "owners": [
                {"ownerAddress": "0xAAA", "tokenBalances": []},
                {"ownerAddress": "0xBBB", "tokenBalances": [{"tokenId": "1", "balance": 1}]},
            ],
            "pageKey": "k1",
        }
    )
    assert isinstance(page, Owners)
    assert page.addresses == ["0xAAA", "0xBBB"]
    assert page.next_cursor == "k1"


def test_flat_result_shape_keeps_arrival_order():
    page = parse_page({"result": ["0xCCC", "0xAAA"], "pageKey": None})
    assert isinstance(page, FlatResult)
    assert page.addresses == ["0xCCC", "0xAAA"]
    assert page.next_cursor is None


def test_owners_checked_before_result():
    page = parse_page({"owners": [{"ownerAddress": "0xAAA"}], "result": ["0xBBB"]})
    assert isinstance(page, Owners)
    assert page.addresses == ["0xAAA"]


def test_malformed_entries_are_skipped():
    page = parse_page({"owners": [{"ownerAddress": "0xAAA"}, {"tokenBalances": []}, "0xBBB"]})
    assert page.addresses == ["0xAAA"]

    page = parse_page({"result": ["0xAAA", 7, None]})
    assert page.addresses == ["0xAAA"]


def test_unrecognized():
    assert isinstance(parse_page({"error": "nope"}), Unrecognized)
    assert isinstance(parse_page({"owners": "0xAAA"}), Unrecognized)
    assert isinstance(parse_page(["0xAAA"]), Unrecognized)
    assert parse_page({}).addresses == []


def test_empty_or_missing_page_key_ends_paging():
    assert parse_page({"result": ["0xA"]}).next_cursor is None
    assert parse_page({"result": ["0xA"], "pageKey": ""}).next_cursor is None
    assert parse_page({"result": ["0xA"], "pageKey": 12}).next_cursor is None
