#    test_reservation.py
#        Test the reading of the stack and heap reservation sections
#
#   - License : MIT - See LICENSE file.
#   - Project :  Elfmem - ELF memory footprint analyzer
#
#   Copyright (c) 2026 Elfmem Developers

from elfmem.core.reservation import read_reservations, Reservations
from test import ElfMemUnitTest


class TestReservations(ElfMemUnitTest):

    def test_no_section(self):
        self.assertEqual(read_reservations([]), Reservations(stack=None, heap=None))
        self.assertEqual(read_reservations([('.text', 100), ('.bss', 20)]), Reservations(stack=None, heap=None))

    def test_stack_and_heap(self):
        reservations = read_reservations([('.text', 100), ('.stack', 2048), ('.heap', 4096)])
        self.assertEqual(reservations.stack, 2048)
        self.assertEqual(reservations.heap, 4096)

    def test_only_one(self):
        reservations = read_reservations([('.heap', 512)])
        self.assertIsNone(reservations.stack)
        self.assertEqual(reservations.heap, 512)

    def test_zero_size_is_not_declared(self):
        reservations = read_reservations([('.stack', 0), ('.heap', 0)])
        self.assertIsNone(reservations.stack)
        self.assertIsNone(reservations.heap)

    def test_names_are_exact(self):
        reservations = read_reservations([('.STACK', 100), ('stack', 100), ('.stack_dummy', 100), ('.Heap', 100), ('.heap.user', 100)])
        self.assertIsNone(reservations.stack)
        self.assertIsNone(reservations.heap)

    def test_last_one_wins(self):
        reservations = read_reservations([('.stack', 100), ('.stack', 200), ('.heap', 300), ('.heap', 0)])
        self.assertEqual(reservations.stack, 200)
        self.assertIsNone(reservations.heap)    # The last .heap is empty


if __name__ == '__main__':
    import unittest
    unittest.main()
