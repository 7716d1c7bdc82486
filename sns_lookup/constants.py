from solders.pubkey import Pubkey

# SNS program and well-known accounts
NAME_PROGRAM_ID = Pubkey.from_string("namesLPneVptA9Z5rqUDD9tMTWEJwofgaYwp8cawRkX")
# Parent of every .sol domain
ROOT_DOMAIN_ACCOUNT = Pubkey.from_string("58PwtjSDuFHuUkYjH9BYnnQKHfwo9reZhC2zMJv9JPkx")
REVERSE_LOOKUP_CLASS = Pubkey.from_string("33m47vH6Eav6jr5Ry86XjhRft2jRBLDnDgPSHoquXi2Z")
# Class of records v2 accounts
CENTRAL_STATE_SNS_RECORDS = Pubkey.from_string("2pMnqHvei2N5oDcVGCRdZx48gqti199wr5CsyTTafsbo")

HASH_PREFIX = "SPL Name Service"

# Header: parent(32), owner(32), class(32)
NAME_REGISTRY_HEADER_LEN = 96

ZERO_KEY = bytes(32)
