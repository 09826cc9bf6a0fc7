# (C) 2024 Irreducible Inc.


def bits_mask(n_bits: int) -> int:
    """Returns a mask for the least-significant bits.

    For example, bits_mask(4) returns 0x0f and bits_mask(9) returns 0x01ff.

    :param n_bits: the number of bits which will be 1.
    """
    return (1 << n_bits) - 1


def int_to_bits(x: int, n_bits: int) -> list[int]:
    """Little-endian bit decomposition: element j is bit j of x."""
    return [(x >> i) & 1 for i in range(n_bits)]


def bits_to_int(bits: list[int]) -> int:
    result = 0
    for i, bit in enumerate(bits):
        assert bit in (0, 1)
        result |= bit << i
    return result


def is_power_of_two(x: int) -> bool:
    return x > 0 and x & (x - 1) == 0


def next_power_of_two(x: int) -> int:
    # same convention as Rust's usize::next_power_of_two: 0 and 1 both map to 1
    if x <= 1:
        return 1
    return 1 << (x - 1).bit_length()


def log2_exact(x: int) -> int:
    if not is_power_of_two(x):
        raise ValueError(f"{x} is not a power of two")
    return x.bit_length() - 1
