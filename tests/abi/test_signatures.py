from abi2openapi.abi import AbiJson

__author__ = "abi2openapi developers"
__copyright__ = "abi2openapi developers"
__license__ = "MIT"

ABI = [
    {
        "type": "function",
        "name": "transfer",
        "inputs": [{"name": "_to", "type": "address"}, {"name": "_v", "type": "uint"}],
    },
    {
        "type": "function",
        "name": "multicall",
        "inputs": [
            {
                "name": "calls",
                "type": "tuple[]",
                "components": [
                    {"name": "target", "type": "address"},
                    {"name": "data", "type": "bytes"},
                ],
            }
        ],
    },
    {
        "type": "event",
        "name": "Transfer",
        "inputs": [
            {"name": "from", "type": "address", "indexed": True},
            {"name": "to", "type": "address", "indexed": True},
            {"name": "value", "type": "uint256"},
        ],
    },
    {
        "type": "error",
        "name": "Expired",
        "inputs": [{"name": "deadline", "type": "uint256"}],
    },
    {"type": "constructor", "inputs": []},
]


def test_canonical_type():
    assert AbiJson.get_type({"type": "uint"}) == "uint256"
    assert AbiJson.get_type({"type": "uint[2][]"}) == "uint256[2][]"
    assert (
        AbiJson.get_type(
            {
                "type": "tuple[2]",
                "components": [{"type": "bool"}, {"type": "tuple", "components": []}],
            }
        )
        == "(bool,())[2]"
    )


def test_plain_and_canonical_signatures_differ_for_tuples():
    multicall = ABI[1]

    assert AbiJson.plain_signature(multicall) == "multicall(tuple[])"
    assert AbiJson.abi_entry_to_signature(multicall) == "multicall((address,bytes)[])"


def test_get_function_signatures():
    assert AbiJson(ABI).get_function_signatures() == [
        "transfer(address,uint256)",
        "multicall((address,bytes)[])",
    ]


def test_get_selectors():
    x = AbiJson(ABI).get_selectors()

    assert x["functions"]["transfer(address,uint256)"] == "0xa9059cbb"
    assert (
        x["events"]["Transfer(address,address,uint256)"]
        == "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"
    )
    assert list(x["errors"].keys()) == ["Expired(uint256)"]
    assert len(x["errors"]["Expired(uint256)"]) == 10


def test_get_event_definitions():
    assert AbiJson(ABI).get_event_definitions() == [
        "Transfer(address indexed from, address indexed to, uint256 value)"
    ]


def test_empty_abi():
    assert AbiJson(None).get_function_signatures() == []
    assert AbiJson([]).get_event_definitions() == []
