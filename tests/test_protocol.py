import pytest

from authorhub.protocol import (
    CachingSha2Response,
    ClientFlag,
    Command,
    FieldFlag,
    FieldType,
    PacketMarker,
    StatusFlag,
)


@pytest.mark.parametrize(
    "value, member",
    [
        (0x00, PacketMarker.OK),
        (0x01, PacketMarker.AUTH_MORE_DATA),
        (0xFB, PacketMarker.LOCAL_IN_FILE),
        (0xFE, PacketMarker.EOF),
        (0xFF, PacketMarker.ERR),
    ],
)
def test_packet_markers(value, member):
    assert PacketMarker(value) is member


@pytest.mark.parametrize("flags, count", [(ClientFlag, 25), (FieldFlag, 16), (StatusFlag, 15)])
def test_flags_are_consecutive_bits(flags, count):
    values = [member.value for member in flags]
    assert values == [1 << bit for bit in range(count)]


def test_client_flags_combine():
    caps = ClientFlag(ClientFlag.PROTOCOL_41 | ClientFlag.COMPRESS)
    assert ClientFlag.COMPRESS in caps
    assert ClientFlag.SSL not in caps
    assert ClientFlag(1 << 24) is ClientFlag.DEPRECATE_EOF


def test_commands_start_at_one_and_are_consecutive():
    values = [member.value for member in Command]
    assert values == list(range(1, len(values) + 1))
    assert Command(1) is Command.QUIT
    assert Command(values[-1]) is Command.STMT_FETCH


def test_field_types_two_ranges():
    assert FieldType(16) is FieldType.BIT
    assert FieldType(0xF2) is FieldType.VECTOR
    assert FieldType(0xFF) is FieldType.GEOMETRY
    with pytest.raises(ValueError):
        FieldType(0x20)


def test_caching_sha2_responses():
    assert CachingSha2Response(2) is CachingSha2Response.REQUEST_PUBLIC_KEY
    assert CachingSha2Response(3) is CachingSha2Response.FAST_AUTH_SUCCESS
    assert CachingSha2Response(4) is CachingSha2Response.PERFORM_FULL_AUTHENTICATION