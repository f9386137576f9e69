from web3 import Web3


def capitalize_first(string):
    return string[:1].upper() + string[1:]


def keccak(text):
    return Web3.to_hex(Web3.keccak(text=text))


def function_sig_to_hash(text):
    return keccak(text=text)[:10]
