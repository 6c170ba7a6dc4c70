import unittest

from unixping.cli import build_parser


class TestCli(unittest.TestCase):
    def test_build_parser_accepts_known_args(self) -> None:
        p = build_parser()

        # Parse only; no side effects.
        args = p.parse_args(
            [
                "-6",
                "--packet-size",
                "8",
                "--timeout-ms",
                "2500",
                "--ttl",
                "5",
                "--fragment",
                "dont",
                "--os",
                "freebsd",
                "--os-major",
                "13",
                "--busybox",
                "no",
                "--dry-run",
                "--print-json",
                "2001:db8::1",
            ]
        )

        self.assertEqual(args.address, "2001:db8::1")
        self.assertTrue(args.ipv6)
        self.assertEqual(args.packet_size, 8)
        self.assertEqual(args.timeout_ms, 2500)
        self.assertEqual(args.ttl, 5)
        self.assertEqual(args.fragment, "dont")
        self.assertEqual(args.os, "freebsd")
        self.assertEqual(args.os_major, 13)
        self.assertEqual(args.busybox, "no")
        self.assertTrue(args.dry_run)
        self.assertTrue(args.print_json)
        self.assertFalse(args.print_rtt)
        self.assertFalse(args.print_cmd)

    def test_defaults(self) -> None:
        args = build_parser().parse_args(["192.0.2.1"])
        self.assertFalse(args.ipv6)
        self.assertEqual(args.ttl, 0)
        self.assertEqual(args.fragment, "default")
        self.assertEqual(args.busybox, "auto")
        self.assertIsNone(args.os_major)


if __name__ == "__main__":
    unittest.main(verbosity=2)
