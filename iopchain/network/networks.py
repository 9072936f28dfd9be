"""
The per-network parameter tables for the IoP chain (mainnet, testnet, regtest)

These are literal transcriptions of the chain's consensus and relay constants. Every value here is consumed
verbatim by other subsystems, so a transcription error produces an incompatible chain. The tables are turned
into frozen NetworkParams records by iopchain.network.params.build_network.

Deployment threshold/window of None means "use the network's activation_threshold/miner_window".
"""
from typing import Final

__all__ = ["NETWORK_TYPES", "MAIN", "TESTNET", "REGTEST", "NETWORK_TABLES"]

NETWORK_TYPES: Final[tuple] = ("main", "testnet", "regtest")

# --- MAINNET --- #

MAIN: Final[dict] = {
    "type": "main",
    "seeds": (
        "mainnet.iop.cash",
        "main1.iop.cash",
        "main2.iop.cash",
        "main3.iop.cash",
        "main4.iop.cash",
        "main5.iop.cash",
    ),
    "magic": 0xd3bbb0fd,
    "port": 4877,
    "checkpoint_map": {
        20000: "c19bd1e263e8eacdf08ef998f863a8f7f667acfb2092ed9a27ce050200000000",
        47654: "0aec26ccfe6b2a482524e3ba6fa79149078ff03ef3812e82c694841100000000",
        78624: "1361a76a81795b726d7c8088fb53e4b57799e588f4bad84df0da1f0000000000",
    },
    "halving_interval": 150000,
    "genesis": {
        "version": 1,
        "hash": "b32dc8b6bf412cf71abb8d433349f16a77e064bee89bcb56e52e5fbf00000000",
        "prev_block": "0000000000000000000000000000000000000000000000000000000000000000",
        "merkle_root": "e12b8f2bef968efbdf2fab49fb3f1c59456e7d9b0f2c4afb4750a92d6dc41b95",
        "ts": 1463452181,
        "bits": 486604799,
        "nonce": 1875087468,
        "height": 0,
    },
    "genesis_block": (
        "0100000000000000000000000000000000000000000000000000000000000000000000"
        "00e12b8f2bef968efbdf2fab49fb3f1c59456e7d9b0f2c4afb4750a92d6dc41b951582"
        "3a57ffff001d6c90c36f01010000000100000000000000000000000000000000000000"
        "00000000000000000000000000ffffffff3e04ffff001d0104364c61204e6163696f6e"
        "204d617920313674682032303136202d205361726d69656e746f206365726361206465"
        "6c2064657363656e736fffffffff0100f2052a01000000434104ce49f9cdc8d23176c8"
        "18fd7e27e7b614d128a47acfdad0e4542300e7efbd8879f1337af3188c0dcb0747fdf2"
        "6d0cb3b0fca0f4e5d7aec53c43f4a933f570ae86ac00000000"
    ),
    "pow": {
        "limit": 0x00000000ffffffffffffffffffffffffffffffffffffffffffffffffffffffff,
        "bits": 486604799,
        "chainwork": 0x000000000000000000000000000000000000000000000000000e20799b006d2c,
        "target_timespan": 14 * 24 * 60 * 60,
        "target_spacing": 10 * 60,
        "retarget_interval": 2016,
        "target_reset": False,
        "no_retargeting": False,
    },
    "block": {
        "bip34_height": -1,  # never
        "bip34_hash": None,
        "bip65_height": 0,  # always
        "bip65_hash": "b32dc8b6bf412cf71abb8d433349f16a77e064bee89bcb56e52e5fbf00000000",
        "bip66_height": 0,  # always
        "bip66_hash": "b32dc8b6bf412cf71abb8d433349f16a77e064bee89bcb56e52e5fbf00000000",
        "prune_after_height": 1000,
        "keep_blocks": 288,
        "max_tip_age": 24 * 60 * 60,
        "slow_height": 80000,
    },
    "bip30": {},
    "activation_threshold": 1916,  # 95% of 2016
    "miner_window": 2016,  # target_timespan / target_spacing
    "deployments": {
        "csv": {
            "name": "csv",
            "bit": 0,
            "start_time": 1462060800,  # May 1st, 2016
            "timeout": 1493596800,  # May 1st, 2017
            "threshold": None,
            "window": None,
            "required": False,
            "force": True,
        },
        "segwit": {
            "name": "segwit",
            "bit": 1,
            "start_time": 0,  # undefined
            "timeout": 0,  # undefined
            "threshold": None,
            "window": None,
            "required": True,
            "force": False,
        },
        "segsignal": {
            "name": "segsignal",
            "bit": 4,
            "start_time": 0,  # undefined
            "timeout": 0,  # undefined
            "threshold": None,
            "window": None,
            "required": False,
            "force": False,
        },
        "testdummy": {
            "name": "testdummy",
            "bit": 28,
            "start_time": 1199145601,  # January 1, 2008
            "timeout": 1230767999,  # December 31, 2008
            "threshold": None,
            "window": None,
            "required": False,
            "force": True,
        },
    },
    "key_prefix": {
        "privkey": 0x31,
        "xpubkey": 0x2780915F,
        "xprivkey": 0xAE3416F6,
        "xpubkey58": "9PPH",
        "xprivkey58": "dywP",
        "coin_type": 66,  # BIP44 code for IOP
    },
    "address_prefix": {
        "pubkeyhash": 0x75,
        "scripthash": 0xAE,
        "witnesspubkeyhash": 0xAA,  # unverified
        "witnessscripthash": 0xAA,  # unverified
        "bech32": "bc",  # unverified
    },
    "require_standard": True,
    "rpc_port": 8337,
    "min_relay": 1000,
    "fee_rate": 100000,
    "max_fee_rate": 400000,
    "self_connect": False,
    "request_mempool": False,
}

# --- TESTNET --- #

TESTNET: Final[dict] = {
    "type": "testnet",
    "seeds": (
        "testnet.iop.cash",
        "test1.iop.cash",
        "test2.iop.cash",
    ),
    "magic": 0xb350fcb1,
    "port": 7475,
    "checkpoint_map": {
        10000: "2f5e87e031383e21e650a3274c33ceb477702fc73f966bef022c9bb000000000",
        18000: "fd71a128bcb9aa2516f461dc1b712dc2428c9340886babce10adcce000000000",
    },
    "halving_interval": 100000,
    "genesis": {
        "version": 1,
        "hash": "a3f3d71820ea72609c0ba999e577403120e5be4f4fda0c2363b82b6f00000000",
        "prev_block": "0000000000000000000000000000000000000000000000000000000000000000",
        "merkle_root": "e12b8f2bef968efbdf2fab49fb3f1c59456e7d9b0f2c4afb4750a92d6dc41b95",
        "ts": 1463452342,
        "bits": 486604799,
        "nonce": 3335213172,
        "height": 0,
    },
    "genesis_block": (
        "0100000000000000000000000000000000000000000000000000000000000000000000"
        "00e12b8f2bef968efbdf2fab49fb3f1c59456e7d9b0f2c4afb4750a92d6dc41b95b682"
        "3a57ffff001d7450cbc601010000000100000000000000000000000000000000000000"
        "00000000000000000000000000ffffffff3e04ffff001d0104364c61204e6163696f6e"
        "204d617920313674682032303136202d205361726d69656e746f206365726361206465"
        "6c2064657363656e736fffffffff0100f2052a01000000434104ce49f9cdc8d23176c8"
        "18fd7e27e7b614d128a47acfdad0e4542300e7efbd8879f1337af3188c0dcb0747fdf2"
        "6d0cb3b0fca0f4e5d7aec53c43f4a933f570ae86ac00000000"
    ),
    "pow": {
        "limit": 0x00000000ffffffffffffffffffffffffffffffffffffffffffffffffffffffff,
        "bits": 486604799,
        "chainwork": 0x0000000000000000000000000000000000000000000000000000000000000000,
        "target_timespan": 14 * 24 * 60 * 60,
        "target_spacing": 10 * 60,
        "retarget_interval": 2016,
        "target_reset": True,
        "no_retargeting": False,
    },
    "block": {
        "bip34_height": -1,
        "bip34_hash": None,
        "bip65_height": 0,
        "bip65_hash": "a3f3d71820ea72609c0ba999e577403120e5be4f4fda0c2363b82b6f00000000",
        "bip66_height": 0,
        "bip66_hash": "a3f3d71820ea72609c0ba999e577403120e5be4f4fda0c2363b82b6f00000000",
        "prune_after_height": 1000,
        "keep_blocks": 10000,
        "max_tip_age": 24 * 60 * 60,
        "slow_height": 18000,
    },
    "bip30": {},
    "activation_threshold": 1512,  # 75% for testchains
    "miner_window": 2016,  # target_timespan / target_spacing
    "deployments": {
        "csv": {
            "name": "csv",
            "bit": 0,
            "start_time": 1456790400,  # March 1st, 2016
            "timeout": 1493596800,  # May 1st, 2017
            "threshold": None,
            "window": None,
            "required": False,
            "force": True,
        },
        "segwit": {
            "name": "segwit",
            "bit": 1,
            "start_time": 0,  # undefined
            "timeout": 0,  # undefined
            "threshold": None,
            "window": None,
            "required": True,
            "force": False,
        },
        "segsignal": {
            "name": "segsignal",
            "bit": 4,
            "start_time": 0xffffffff,
            "timeout": 0xffffffff,
            "threshold": 269,
            "window": 336,
            "required": False,
            "force": False,
        },
        "testdummy": {
            "name": "testdummy",
            "bit": 28,
            "start_time": 1199145601,  # January 1, 2008
            "timeout": 1230767999,  # December 31, 2008
            "threshold": None,
            "window": None,
            "required": False,
            "force": True,
        },
    },
    "key_prefix": {
        "privkey": 0x4c,
        "xpubkey": 0xbb8f4852,
        "xprivkey": 0x2b7fa42a,
        "xpubkey58": "gpPf",
        "xprivkey58": "AEbG",
        "coin_type": 1,
    },
    "address_prefix": {
        "pubkeyhash": 0x82,
        "scripthash": 0x31,
        "witnesspubkeyhash": 0x03,  # unverified
        "witnessscripthash": 0x28,  # unverified
        "bech32": "tb",  # unverified
    },
    "require_standard": False,
    "rpc_port": 14337,
    "min_relay": 1000,
    "fee_rate": 20000,
    "max_fee_rate": 60000,
    "self_connect": False,
    "request_mempool": False,
}

# --- REGTEST --- #

REGTEST: Final[dict] = {
    "type": "regtest",
    "seeds": (
        "127.0.0.1",
    ),
    "magic": 0x9eccb235,
    "port": 14877,
    "checkpoint_map": {},
    "halving_interval": 150,
    "genesis": {
        "version": 1,
        "hash": "b5b87145e5fc1b8c231f9f9d541e9d2b60ae444bb24aaec3ee56364baa5bac13",
        "prev_block": "0000000000000000000000000000000000000000000000000000000000000000",
        "merkle_root": "e12b8f2bef968efbdf2fab49fb3f1c59456e7d9b0f2c4afb4750a92d6dc41b95",
        "ts": 1463452384,
        "bits": 545259519,
        "nonce": 2528424328,
        "height": 0,
    },
    "genesis_block": (
        "0100000000000000000000000000000000000000000000000000000000000000000000"
        "00e12b8f2bef968efbdf2fab49fb3f1c59456e7d9b0f2c4afb4750a92d6dc41b95e0"
        "823a57ffff7f2088b1b4960101000000010000000000000000000000000000000000"
        "000000000000000000000000000000ffffffff3e04ffff001d0104364c61204e6163"
        "696f6e204d617920313674682032303136202d205361726d69656e746f2063657263"
        "612064656c2064657363656e736fffffffff0100f2052a01000000434104ce49f9cd"
        "c8d23176c818fd7e27e7b614d128a47acfdad0e4542300e7efbd8879f1337af3188c"
        "0dcb0747fdf26d0cb3b0fca0f4e5d7aec53c43f4a933f570ae86ac00000000"
    ),
    "pow": {
        "limit": 0x7fffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff,
        "bits": 545259519,
        "chainwork": 0x0000000000000000000000000000000000000000000000000000000000000000,
        "target_timespan": 14 * 24 * 60 * 60,
        "target_spacing": 10 * 60,
        "retarget_interval": 2016,
        "target_reset": True,
        "no_retargeting": True,
    },
    "block": {
        "bip34_height": -1,
        "bip34_hash": None,
        "bip65_height": 0,
        "bip65_hash": None,
        "bip66_height": 0,
        "bip66_hash": None,
        "prune_after_height": 1000,
        "keep_blocks": 10000,
        "max_tip_age": 0xffffffff,
        "slow_height": 0,
    },
    "bip30": {},
    "activation_threshold": 108,  # 75% for testchains
    "miner_window": 144,  # faster than normal for regtest (144 instead of 2016)
    "deployments": {
        "csv": {
            "name": "csv",
            "bit": 0,
            "start_time": 0,
            "timeout": 0xffffffff,
            "threshold": None,
            "window": None,
            "required": False,
            "force": True,
        },
        "segwit": {
            "name": "segwit",
            "bit": 1,
            "start_time": 0,
            "timeout": 0xffffffff,
            "threshold": None,
            "window": None,
            "required": True,
            "force": False,
        },
        "segsignal": {
            "name": "segsignal",
            "bit": 4,
            "start_time": 0xffffffff,
            "timeout": 0xffffffff,
            "threshold": 269,
            "window": 336,
            "required": False,
            "force": False,
        },
        "testdummy": {
            "name": "testdummy",
            "bit": 28,
            "start_time": 0,
            "timeout": 0xffffffff,
            "threshold": None,
            "window": None,
            "required": False,
            "force": True,
        },
    },
    "key_prefix": {
        "privkey": 0x4c,
        "xpubkey": 0xbb8f4852,
        "xprivkey": 0x2b7fa42a,
        "xpubkey58": "gpPf",
        "xprivkey58": "AEbG",
        "coin_type": 1,
    },
    "address_prefix": {
        "pubkeyhash": 0x82,
        "scripthash": 0x31,
        "witnesspubkeyhash": 0x03,  # unverified
        "witnessscripthash": 0x28,  # unverified
        "bech32": "rb",  # unverified
    },
    "require_standard": False,
    "rpc_port": 18337,
    "min_relay": 1000,
    "fee_rate": 20000,
    "max_fee_rate": 60000,
    "self_connect": True,
    "request_mempool": True,
}

NETWORK_TABLES: Final[dict] = {
    "main": MAIN,
    "testnet": TESTNET,
    "regtest": REGTEST,
}
