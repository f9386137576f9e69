from eth_abi.grammar import normalize as normalize_type_aliases
from abi2openapi.data.datatypes import ItemType
from abi2openapi.utils import keccak, function_sig_to_hash


class AbiJson:

    """
    Provides convenient functions to deal with ABI definition files (JSON)

    Attributes:
        abi_dict (list): standard JSON ABI format parsed into a list of dicts
    """

    def __init__(self, abi_dict):
        self.abi_dict = abi_dict if abi_dict else []

    @staticmethod
    def get_type(param):
        t = param.get("type", "")
        if t.startswith("tuple"):
            ttypes = ",".join(
                [AbiJson.get_type(x) for x in param.get("components") or []]
            )
            return f"({ttypes}){t[len('tuple'):]}"
        else:
            return normalize_type_aliases(t)

    @staticmethod
    def plain_signature(abie):
        """Signature as written in the ABI: name(type,type,...) with tuples
        left as the literal type string.
        """
        par_str = ",".join([x.get("type", "") for x in abie.get("inputs") or []])
        return f"{abie.get('name') or ''}({par_str})"

    @staticmethod
    def abi_entry_to_signature(abie):
        """Canonical signature used for hashing, tuples expanded."""
        par_str = ",".join([AbiJson.get_type(x) for x in abie.get("inputs") or []])
        return f"{abie.get('name') or ''}({par_str})"

    @staticmethod
    def selector(abie):
        return function_sig_to_hash(AbiJson.abi_entry_to_signature(abie))

    @staticmethod
    def topic(abie):
        return keccak(AbiJson.abi_entry_to_signature(abie))

    def entries(self, item_type: ItemType):
        return [x for x in self.abi_dict if ItemType.of(x) == item_type]

    def get_function_signatures(self) -> list[str]:
        """Extracts the function signatures for the ABI file.

        Returns:
            list[str]: function signatures in the ABI
        """
        return [
            AbiJson.abi_entry_to_signature(x) for x in self.entries(ItemType.FUNCTION)
        ]

    def get_selectors(self) -> dict:
        """Maps every function, error and event to its canonical signature
        and hash.

        Returns:
            dict: {"functions": {sig: selector}, "errors": ..., "events": ...}
        """
        return {
            "functions": {
                AbiJson.abi_entry_to_signature(x): AbiJson.selector(x)
                for x in self.entries(ItemType.FUNCTION)
            },
            "errors": {
                AbiJson.abi_entry_to_signature(x): AbiJson.selector(x)
                for x in self.entries(ItemType.ERROR)
            },
            "events": {
                AbiJson.abi_entry_to_signature(x): AbiJson.topic(x)
                for x in self.entries(ItemType.EVENT)
            },
        }

    def get_event_definitions(self) -> list[str]:
        """Renders each event as a readable prototype, e.g.
        Transfer(address indexed from, address indexed to, uint256 value)

        Returns:
            list[str]: event prototypes in ABI order
        """
        return [
            "{}({})".format(
                x.get("name") or "",
                ", ".join(
                    " ".join(
                        s
                        for s in [
                            p.get("type", ""),
                            "indexed" if p.get("indexed") else "",
                            p.get("name") or "",
                        ]
                        if s
                    )
                    for p in x.get("inputs") or []
                ),
            )
            for x in self.entries(ItemType.EVENT)
        ]
