"""
Tests for certificate payload encoding and the TreeCertificate record
"""

import pytest

from treecert.certificate.codec import HEADER_SIZE, decode_payload, encode_payload
from treecert.certificate.models import TreeCertificate
from treecert.merkle.builder import build_tree_from_rows
from treecert.protocol.errors import InvalidInputError


class TestEncodePayload:
    """Tests for encode_payload."""

    def test_byte_exact_layout(self):
        """Test id (4 BE) + timestamp (8 BE) + roots back to back."""
        payload = encode_payload(7, 1000, [bytes([0xAA, 0xBB]), bytes([0xCC, 0xDD])])

        assert payload == (
            b"\x00\x00\x00\x07"
            + b"\x00\x00\x00\x00\x00\x00\x03\xe8"
            + b"\xaa\xbb"
            + b"\xcc\xdd"
        )

    def test_root_order_preserved(self):
        """Test roots are not re-sorted."""
        forward = encode_payload(1, 2, [b"\x02", b"\x01"])
        backward = encode_payload(1, 2, [b"\x01", b"\x02"])

        assert forward[HEADER_SIZE:] == b"\x02\x01"
        assert backward[HEADER_SIZE:] == b"\x01\x02"

    def test_no_roots(self):
        """Test header only when no roots are given."""
        assert encode_payload(0, 0, []) == b"\x00" * 12

    def test_negative_id_uses_bit_pattern(self):
        """Test negative ids encode as their unsigned bit pattern."""
        assert encode_payload(-1, 0, [])[:4] == b"\xff\xff\xff\xff"
        assert encode_payload(-1, 0, []) == encode_payload(0xFFFFFFFF, 0, [])

    def test_negative_timestamp(self):
        """Test negative timestamps encode as two's complement."""
        assert encode_payload(0, -2, [])[4:12] == b"\xff" * 7 + b"\xfe"

    def test_accepts_tree_roots(self):
        """Test MerkleTree roots contribute their digest."""
        root = build_tree_from_rows([["a", 1], ["b", 2]], "SHA-1")

        assert encode_payload(1, 2, [root]) == encode_payload(1, 2, [root.digest])

    @pytest.mark.parametrize(
        "id, timestamp",
        [(1 << 32, 0), (-(1 << 31) - 1, 0), (0, 1 << 64), (0, -(1 << 63) - 1), (True, 0), ("7", 0)],
    )
    def test_out_of_range_integers_rejected(self, id, timestamp):
        with pytest.raises(InvalidInputError):
            encode_payload(id, timestamp, [])

    def test_non_bytes_root_rejected(self):
        with pytest.raises(InvalidInputError):
            encode_payload(1, 2, ["aabb"])


class TestDecodePayload:
    """Tests for decode_payload."""

    def test_decode_fields(self):
        """Test the fields of a known payload come back."""
        root_a = b"\x01" * 20
        root_b = b"\x02" * 20
        payload = encode_payload(7, 1000, [root_a, root_b])

        decoded = decode_payload(payload, 20)

        assert decoded.id == 7
        assert decoded.timestamp == 1000
        assert decoded.roots == (root_a, root_b)

    def test_decode_returns_signed_values(self):
        """Test bit patterns are read back as signed integers."""
        decoded = decode_payload(encode_payload(0xFFFFFFFF, -5, []), 20)

        assert decoded.id == -1
        assert decoded.timestamp == -5
        assert decoded.roots == ()

    def test_truncated_header_rejected(self):
        with pytest.raises(InvalidInputError):
            decode_payload(b"\x00" * 11, 20)

    def test_partial_root_rejected(self):
        with pytest.raises(InvalidInputError):
            decode_payload(b"\x00" * 12 + b"\x01" * 21, 20)

    def test_bad_digest_size_rejected(self):
        with pytest.raises(InvalidInputError):
            decode_payload(b"\x00" * 12, 0)


class TestTreeCertificate:
    """Tests for TreeCertificate."""

    def test_equal_by_timestamp_only(self):
        """Test certificates with the same timestamp are equal regardless of id/signature."""
        first = TreeCertificate(id=1, timestamp=1000, signature=b"\x01")
        second = TreeCertificate(id=2, timestamp=1000, signature=b"\x02\x03")

        assert first == second
        assert hash(first) == hash(second)
        assert len({first, second}) == 1

    def test_different_timestamps_not_equal(self):
        first = TreeCertificate(id=1, timestamp=1000, signature=b"\x01")
        second = TreeCertificate(id=1, timestamp=1001, signature=b"\x01")

        assert first != second

    def test_not_equal_to_other_types(self):
        assert TreeCertificate(id=1, timestamp=1000, signature=b"") != 1000

    def test_immutable(self):
        cert = TreeCertificate(id=1, timestamp=1000, signature=b"")

        with pytest.raises(AttributeError):
            cert.timestamp = 5

    def test_dict_round_trip(self):
        """Test serialization to a JSON-compatible dict."""
        cert = TreeCertificate(id=7, timestamp=1000, signature=b"\xde\xad")

        data = cert.to_dict()
        restored = TreeCertificate.from_dict(data)

        assert data == {"id": 7, "timestamp": 1000, "signature": "dead"}
        assert restored.id == 7
        assert restored.signature == b"\xde\xad"

    def test_str_lists_signature_bytes(self):
        """Test rendering as [id, timestamp, [signed signature bytes]]."""
        assert str(TreeCertificate(id=7, timestamp=1000, signature=b"\xab")) == "[7, 1000, [-85]]"
        assert (
            str(TreeCertificate(id=1, timestamp=2, signature=b"\x00\x7f\x80\xff"))
            == "[1, 2, [0, 127, -128, -1]]"
        )
        assert str(TreeCertificate(id=1, timestamp=2, signature=b"")) == "[1, 2, []]"

    def test_invalid_fields_rejected(self):
        with pytest.raises(InvalidInputError):
            TreeCertificate(id=1 << 32, timestamp=0, signature=b"")
        with pytest.raises(InvalidInputError):
            TreeCertificate(id=0, timestamp=0, signature="sig")
