from __future__ import annotations

import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from digestsum.errors import EX_USAGE, InsecureAlgorithmError, UnknownAlgorithmError
from digestsum.services import registry
from digestsum.services.registry import Algorithm

HELLO_VECTORS = {
    Algorithm.BLAKE2B: (
        "a2764d133a16816b5847a737a786f2ece4c148095c5faa73e24b4cc5d666c3e4"
        "5ec271504e14dc6127ddfce4e144fb23b91a6f7b04b53d695502290722953b0f"
    ),
    Algorithm.BLAKE2S: "30d8777f0e178582ec8cd2fcdc18af57c828ee2f89e978df52c8e7af078bd5cf",
    Algorithm.BLAKE3: "ede5c0b10f2ec4979c69b52f61e42ff5b413519ce09be0f14d098dcfe5f6f98d",
    Algorithm.KECCAK224: "f89e15347fc711f25fc629f4ba60e3326643dc1daf5ae9c04e86961d",
    Algorithm.KECCAK256: "b6e16d27ac5ab427a7f68900ac5559ce272dc6c37c82b3e052246c82244c50e4",
    Algorithm.KECCAK384: (
        "939e56d1f678b0b21f5c176ac1a5fed347a35c688cf64bd997bc57113b6ba624"
        "5149157665b7dd23358228dcda5803de"
    ),
    Algorithm.KECCAK512: (
        "101f353a4727cc94ef81613bb38a807ebc888e2061baa4f845c84cd3c317f343"
        "0fda3dbeb44010844b35bccc8e190061d05b4d002c709615275a44e18e494f0c"
    ),
    Algorithm.MD2: "8cca0e965edd0e223b744f9cedf8e141",
    Algorithm.MD4: "0abe9ee1f376caa1bcecad9042f16e73",
    Algorithm.MD5: "6cd3556deb0da54bca060b4c39479839",
    Algorithm.RIPEMD160: "58262d1fbdbe4530d8865d3518c6d6e41002610f",
    Algorithm.SHA1: "943a702d06f34599aee1f8da8ef9f7296031d699",
    Algorithm.SHA224: "8552d8b7a7dc5476cb9e25dee69a8091290764b7f2a64fe6e78e9568",
    Algorithm.SHA256: "315f5bdb76d078c43b8ac0064e4a0164612b1fce77c869345bfc94c75894edd3",
    Algorithm.SHA384: (
        "55bc556b0d2fe0fce582ba5fe07baafff035653638c7ac0d5494c2a64c0bea1c"
        "c57331c7c12a45cdbca7f4c34a089eeb"
    ),
    Algorithm.SHA512: (
        "c1527cd893c124773d811911970c8fe6e857d6df5dc9226bd8a160614c0cd963"
        "a4ddea2b94bb7d36021ef9d865d5cea294a82dd49a0bb269f51f6e7a57f79421"
    ),
    Algorithm.SHA3_224: "6a33e22f20f16642697e8bd549ff7b759252ad56c05a1b0acc31dc69",
    Algorithm.SHA3_256: "f345a219da005ebe9c1a1eaad97bbf38a10c8473e41d0af7fb617caa0c6aa722",
    Algorithm.SHA3_384: (
        "6ba9ea268965916f5937228dde678c202f9fe756a87d8b1b7362869583a45901"
        "fd1a27289d72fc0e3ff48b1b78827d3a"
    ),
    Algorithm.SHA3_512: (
        "8e47f1185ffd014d238fabd02a1a32defe698cbf38c037a90e3c0a0a32370fb5"
        "2cbd641250508502295fcabcbf676c09470b27443868c8e5f70e26dc337288af"
    ),
    Algorithm.SM3: "e3bca101b496880c3653dad85861d0e784b00a8c18f7574472d156060e9096bf",
    Algorithm.STREEBOG256: "ccb6fae3553c101715da535328de718f6f6e412db8611a38025c510ac8f85aeb",
    Algorithm.STREEBOG512: (
        "a83352d35dc8f07ca8048e6752415e5e991527e29415ade0eaad6e48d67bf37b"
        "60dfd7bb4475cbcbe297ed016128391c312dfe3a00e0a9bd0e497389c888eedc"
    ),
}

ABC_VECTORS = {
    Algorithm.BLAKE2B: (
        "ba80a53f981c4d0d6a2797b69f12f6e94c212f14685ac4b74b12bb6fdbffa2d1"
        "7d87c5392aab792dc252d5de4533cc9518d38aa8dbf1925ab92386edd4009923"
    ),
    Algorithm.BLAKE2S: "508c5e8c327c14e2e1a72ba34eeb452f37458b209ed63a294d999b4c86675982",
    Algorithm.BLAKE3: "6437b3ac38465133ffb63b75273a8db548c558465d79db03fd359c6cd5bd9d85",
    Algorithm.KECCAK256: "4e03657aea45a94fc7d47ba826c8d667c0d1e6e33a64a036ec44f58fa12d6c45",
    Algorithm.MD2: "da853b0d3f88d99b30283a69e6ded6bb",
    Algorithm.MD4: "a448017aaf21d8525fc10ae87aa6729d",
    Algorithm.MD5: "900150983cd24fb0d6963f7d28e17f72",
    Algorithm.RIPEMD160: "8eb208f7e05d987a9b044a8e98c6b087f15a0bfc",
    Algorithm.SHA1: "a9993e364706816aba3e25717850c26c9cd0d89d",
    Algorithm.SHA224: "23097d223405d8228642a477bda255b32aadbce4bda0b3f7e36c9da7",
    Algorithm.SHA256: "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad",
    Algorithm.SHA384: (
        "cb00753f45a35e8bb5a03d699ac65007272c32ab0eded1631a8b605a43ff5bed"
        "8086072ba1e7cc2358baeca134c825a7"
    ),
    Algorithm.SHA512: (
        "ddaf35a193617abacc417349ae20413112e6fa4e89a97ea20a9eeee64b55d39a"
        "2192992a274fc1a836ba3c23a3feebbd454d4423643ce80e2a9ac94fa54ca49f"
    ),
    Algorithm.SHA3_224: "e642824c3f8cf24ad09234ee7d3c766fc9a3a5168d0c94ad73b46fdf",
    Algorithm.SHA3_256: "3a985da74fe225b2045c172d6bd390bd855f086e3e9d525b46bfe24511431532",
    Algorithm.SHA3_384: (
        "ec01498288516fc926459f58e2c6ad8df9b473cb0fc08c2596da7cf0e49be4b2"
        "98d88cea927ac7f539f1edf228376d25"
    ),
    Algorithm.SHA3_512: (
        "b751850b1a57168a5693cd924b6b096e08f621827444f70d884f5d0240d2712e"
        "10e116e9192af3c91a7ec57647e3934057340b4cf408d5a56592f8274eec53f0"
    ),
    Algorithm.SM3: "66c7f0f462eeedd9d1f2d46bdc10e4e24167c4875cf2f7a2297da02b8f4ba8e0",
}


class RegistryResolveTests(unittest.TestCase):
    def test_resolve_is_case_insensitive(self) -> None:
        self.assertIs(registry.resolve("SHA256"), Algorithm.SHA256)
        self.assertIs(registry.resolve("sha256"), Algorithm.SHA256)
        self.assertIs(registry.resolve("Sha3-512"), Algorithm.SHA3_512)
        self.assertIs(registry.resolve("  blake3 "), Algorithm.BLAKE3)

    def test_resolve_accepts_aliases(self) -> None:
        self.assertIs(registry.resolve("sha-256"), Algorithm.SHA256)
        self.assertIs(registry.resolve("sha2-512"), Algorithm.SHA512)
        self.assertIs(registry.resolve("ripemd160"), Algorithm.RIPEMD160)
        self.assertIs(registry.resolve("RIPEMD-160"), Algorithm.RIPEMD160)
        self.assertIs(registry.resolve("keccak256"), Algorithm.KECCAK256)

    def test_resolve_unknown_name(self) -> None:
        with self.assertRaises(UnknownAlgorithmError) as ctx:
            registry.resolve("crc32")

        self.assertEqual(str(ctx.exception), "unknown hash algorithm: crc32")
        self.assertEqual(ctx.exception.exit_code, EX_USAGE)

    def test_every_alias_resolves_back(self) -> None:
        for algorithm in registry.list_algorithms():
            for alias in registry.aliases(algorithm):
                self.assertIs(registry.resolve(alias), algorithm)
            self.assertIs(registry.resolve(algorithm.display_name), algorithm)

    def test_display_names(self) -> None:
        self.assertEqual(registry.display_name(Algorithm.BLAKE2B), "BLAKE2b")
        self.assertEqual(str(Algorithm.SHA3_256), "SHA3-256")
        self.assertEqual(Algorithm.KECCAK224.display_name, "Keccak-224")


class RegistryInsecureTests(unittest.TestCase):
    def test_insecure_set(self) -> None:
        insecure = {algorithm for algorithm in Algorithm if algorithm.insecure}
        self.assertEqual(insecure, {Algorithm.MD2, Algorithm.MD4, Algorithm.MD5, Algorithm.SHA1})

    def test_selection_rejects_insecure_without_opt_in(self) -> None:
        with self.assertRaises(InsecureAlgorithmError) as ctx:
            registry.resolve_selection("md5", allow_insecure=False)

        self.assertIn("MD5", str(ctx.exception))
        self.assertEqual(ctx.exception.exit_code, EX_USAGE)

    def test_selection_allows_insecure_with_opt_in(self) -> None:
        self.assertIs(registry.resolve_selection("md5", allow_insecure=True), Algorithm.MD5)

    def test_selection_absent(self) -> None:
        self.assertIsNone(registry.resolve_selection(None, allow_insecure=False))

    def test_secure_selection(self) -> None:
        self.assertIs(registry.resolve_selection("sha512", allow_insecure=False), Algorithm.SHA512)


class RegistryDigestTests(unittest.TestCase):
    def test_hello_world_fixtures_cover_catalog(self) -> None:
        self.assertEqual(set(HELLO_VECTORS), set(registry.list_algorithms()))
        for algorithm, expected in HELLO_VECTORS.items():
            with self.subTest(algorithm=algorithm.display_name):
                self.assertEqual(registry.digest(algorithm, b"Hello, world!").hex(), expected)

    def test_known_vectors(self) -> None:
        for algorithm, expected in ABC_VECTORS.items():
            with self.subTest(algorithm=algorithm.display_name):
                self.assertEqual(registry.digest(algorithm, b"abc").hex(), expected)

    def test_digest_sizes(self) -> None:
        for algorithm in registry.list_algorithms():
            with self.subTest(algorithm=algorithm.display_name):
                self.assertEqual(len(registry.digest(algorithm, b"")), algorithm.digest_size)

    def test_digest_path_matches_digest(self) -> None:
        payload = b"x" * 20000
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "big.bin"
            path.write_bytes(payload)

            for algorithm in (Algorithm.SHA256, Algorithm.BLAKE3, Algorithm.SM3, Algorithm.KECCAK512):
                with self.subTest(algorithm=algorithm.display_name):
                    self.assertEqual(
                        registry.digest_path(algorithm, path),
                        registry.digest(algorithm, payload),
                    )


if __name__ == "__main__":
    unittest.main()
