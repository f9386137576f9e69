import copy
import json
import pytest

from abi2openapi.abi import normalize
from abi2openapi.data import ParsedAbi, ParsedParameter
from abi2openapi.errors import ParseError

__author__ = "abi2openapi developers"
__copyright__ = "abi2openapi developers"
__license__ = "MIT"

ABI = [
    {
        "type": "function",
        "name": "balanceOf",
        "stateMutability": "view",
        "inputs": [{"name": "account", "type": "address", "internalType": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "type": "function",
        "name": "transfer",
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
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
    {"type": "error", "name": "Unauthorized", "inputs": []},
    {"type": "constructor", "inputs": []},
    {"type": "fallback"},
    {"type": "receive", "stateMutability": "payable"},
]


def test_normalize_buckets_items():
    x = normalize(ABI)

    assert x.contract_name == "SmartContract"
    assert [f.name for f in x.functions] == ["balanceOf", "transfer"]
    assert [e.name for e in x.events] == ["Transfer"]
    assert [e.name for e in x.errors] == ["Unauthorized"]


def test_normalize_function_defaults():
    transfer = normalize(ABI).functions[1]

    assert transfer.state_mutability == "nonpayable"
    assert transfer.constant is False
    assert transfer.payable is False
    assert transfer.http_method == "POST"
    assert transfer.signature == "transfer(address,uint256)"
    assert transfer.selector == "0xa9059cbb"


def test_normalize_parameters():
    balance_of = normalize(ABI).functions[0]

    assert balance_of.inputs == (
        ParsedParameter(
            name="account", type="address", internal_type="address", indexed=False
        ),
    )
    assert balance_of.outputs[0].name == ""
    assert balance_of.outputs[0].internal_type == "uint256"
    assert balance_of.selector == "0x70a08231"


def test_normalize_event():
    transfer = normalize(ABI).events[0]

    assert transfer.anonymous is False
    assert [p.indexed for p in transfer.inputs] == [True, True, False]
    assert transfer.signature == "Transfer(address,address,uint256)"
    assert (
        transfer.topic
        == "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"
    )


def test_normalize_error():
    unauthorized = normalize(ABI).errors[0]

    assert unauthorized.signature == "Unauthorized()"
    assert unauthorized.inputs == ()


@pytest.mark.parametrize(
    "item, method",
    [
        ({"stateMutability": "view"}, "GET"),
        ({"stateMutability": "pure"}, "GET"),
        ({"stateMutability": "nonpayable"}, "POST"),
        ({"stateMutability": "payable"}, "POST"),
        ({}, "POST"),
        ({"constant": True}, "GET"),
        ({"constant": False, "payable": True}, "POST"),
    ],
)
def test_normalize_http_method(item, method):
    x = normalize([dict(type="function", name="f", inputs=[], **item)])

    assert x.functions[0].http_method == method


def test_normalize_wrapper():
    x = normalize({"contractName": "Foo", "abi": ABI})

    assert x.contract_name == "Foo"
    assert len(x.functions) == 2


def test_normalize_contract_name_override():
    assert normalize({"contractName": "Foo", "abi": ABI}, "Bar").contract_name == "Bar"
    assert normalize(ABI, contract_name="Bar").contract_name == "Bar"
    assert normalize({"abi": ABI}).contract_name == "SmartContract"


def test_normalize_tuples_are_copied():
    raw = [
        {
            "type": "function",
            "name": "exactInputSingle",
            "stateMutability": "payable",
            "inputs": [
                {
                    "name": "params",
                    "type": "tuple",
                    "internalType": "struct ISwapRouter.ExactInputSingleParams",
                    "components": [
                        {"name": "tokenIn", "type": "address"},
                        {"name": "tokenOut", "type": "address"},
                        {"name": "fee", "type": "uint24"},
                        {"name": "recipient", "type": "address"},
                        {"name": "amountIn", "type": "uint256"},
                        {"name": "amountOutMinimum", "type": "uint256"},
                        {"name": "sqrtPriceLimitX96", "type": "uint160"},
                    ],
                }
            ],
            "outputs": [{"name": "amountOut", "type": "uint256"}],
        }
    ]
    before = copy.deepcopy(raw)
    f = normalize(raw).functions[0]

    assert raw == before
    assert f.signature == "exactInputSingle(tuple)"
    assert f.selector == "0x04e45aaf"
    params = f.inputs[0]
    assert params.internal_type == "struct ISwapRouter.ExactInputSingleParams"
    assert isinstance(params.components, tuple)
    assert [c.name for c in params.components][:2] == ["tokenIn", "tokenOut"]
    assert params.components[2].internal_type == "uint24"


def test_normalize_rejects_wrong_shape():
    for raw in [None, "abi", {"contractName": "Foo"}, {"abi": {}}]:
        with pytest.raises(ParseError) as e:
            normalize(raw)
        assert "ABI must be an array" in str(e.value)


def test_normalize_wraps_item_errors():
    with pytest.raises(ParseError) as e:
        normalize([{"type": "function", "inputs": []}])

    assert isinstance(e.value.__cause__, KeyError)

    with pytest.raises(ParseError):
        normalize([None])


def test_normalize_wraps_unencodable_names():
    raw = json.loads('[{"type":"function","name":"f\\ud800","inputs":[],"outputs":[]}]')
    with pytest.raises(ParseError) as e:
        normalize(raw)

    assert isinstance(e.value.__cause__, UnicodeEncodeError)


def test_normalize_empty():
    assert normalize([]) == ParsedAbi()
