#    test_batch.py
#        Test the analysis of multiple files, with failures not stopping the batch
#
#   - License : MIT - See LICENSE file.
#   - Project :  Elfmem - ELF memory footprint analyzer
#
#   Copyright (c) 2026 Elfmem Developers

import os
import tempfile

from elfmem.core.batch import FootprintAnalyzer, FailureType, BatchResult
from elfmem.core.limits import LimitSet, Metric, FIXED_METRICS
from elfmem.core.segment import SegmentKind
from elfmem.exceptions import MalformedElfError
from test import ElfMemUnitTest
from test.elf_builder import ElfBuilder, PF_R, PF_W, PF_X, make_class_mismatch_firmware


def make_binary(instructions: int, data: int, stack: int = 0) -> bytes:
    builder = ElfBuilder(elfclass=32)
    builder.add_segment(PF_R | PF_X, file_bytes=instructions, address=0x08000000)
    builder.add_segment(PF_R | PF_W, file_bytes=0, memory_size=data, address=0x20000000)
    if stack > 0:
        builder.add_section('.stack', stack)
    return builder.build()


class TestFootprintAnalyzer(ElfMemUnitTest):

    def setUp(self):
        self.tempdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tempdir.cleanup()

    def write_file(self, name: str, data: bytes) -> str:
        path = os.path.join(self.tempdir.name, name)
        with open(path, 'wb') as f:
            f.write(data)
        return path

    def test_analyze_bytes(self):
        analyzer = FootprintAnalyzer(limits=LimitSet(instruction=200))
        image, summary, evaluation = analyzer.analyze_bytes(make_binary(100, 50))
        self.assertEqual(len(image.segments), 2)
        self.assert_segment(image.segments[1], SegmentKind.Data, file_bytes=0, padding_bytes=50)
        self.assertEqual(summary.instruction_bytes, 100)
        self.assertEqual(summary.data_bytes_total, 50)
        self.assertEqual(evaluation.percent(Metric.Instruction), 50)

    def test_analyze_bytes_error(self):
        with self.assertRaises(MalformedElfError):
            FootprintAnalyzer().analyze_bytes(b'hello')

    def test_no_files(self):
        result = FootprintAnalyzer().analyze_files([])
        self.assertIsInstance(result, BatchResult)
        self.assertEqual(result.reports, [])
        self.assertEqual(result.failures, [])
        self.assertFalse(result.any_over_limit())

    def test_order_is_preserved(self):
        paths = [
            self.write_file('c.elf', make_binary(30, 3)),
            self.write_file('a.elf', make_binary(10, 1)),
            self.write_file('b.elf', make_binary(20, 2)),
        ]
        result = FootprintAnalyzer().analyze_files(paths)
        self.assertEqual([report.path for report in result.reports], paths)
        self.assertEqual([report.summary.instruction_bytes for report in result.reports], [30, 10, 20])
        self.assertEqual(result.failures, [])

    def test_failures_do_not_stop_the_batch(self):
        good1 = self.write_file('good1.elf', make_binary(10, 10))
        garbage = self.write_file('garbage.elf', b'This is not an ELF file')
        missing = os.path.join(self.tempdir.name, 'missing.elf')
        good2 = self.write_file('good2.elf', make_binary(20, 20))

        with self.assertLogs('FootprintAnalyzer', level='ERROR') as logs:
            result = FootprintAnalyzer().analyze_files([good1, garbage, missing, self.tempdir.name, good2])

        self.assertEqual([report.path for report in result.reports], [good1, good2])
        self.assertEqual(len(result.failures), 3)

        self.assertEqual(result.failures[0].path, garbage)
        self.assertEqual(result.failures[0].failure_type, FailureType.ExtractionFailure)
        self.assertEqual(result.failures[1].path, missing)
        self.assertEqual(result.failures[1].failure_type, FailureType.IoFailure)
        self.assertEqual(result.failures[2].path, self.tempdir.name)
        self.assertEqual(result.failures[2].failure_type, FailureType.IoFailure)
        for failure in result.failures:
            self.assertGreater(len(failure.cause), 0)

        self.assertEqual(len(logs.output), 3)
        self.assertIn(f"Error reading ELF binary {garbage}", logs.output[0])
        self.assertIn(f"Could not read file {missing}", logs.output[1])

    def test_corrupted_header_does_not_stop_the_batch(self):
        bad = self.write_file('bad.elf', make_class_mismatch_firmware())
        good = self.write_file('good.elf', make_binary(10, 10))
        with self.assertLogs('FootprintAnalyzer', level='ERROR'):
            result = FootprintAnalyzer().analyze_files([bad, good])

        self.assertEqual([report.path for report in result.reports], [good])
        self.assertEqual(len(result.failures), 1)
        self.assertEqual(result.failures[0].path, bad)
        self.assertEqual(result.failures[0].failure_type, FailureType.ExtractionFailure)

    def test_any_over_limit(self):
        small = self.write_file('small.elf', make_binary(10, 10))
        big = self.write_file('big.elf', make_binary(1000, 10))
        analyzer = FootprintAnalyzer(limits=LimitSet(instruction=100))

        result = analyzer.analyze_files([small])
        self.assertFalse(result.any_over_limit())

        result = analyzer.analyze_files([small, big])
        self.assertTrue(result.any_over_limit())
        self.assertFalse(result.reports[0].is_over_limit())
        self.assertTrue(result.reports[1].is_over_limit())

    def test_failed_files_are_not_over_limit(self):
        garbage = self.write_file('garbage.elf', b'\x7fELF garbage')
        with self.assertLogs('FootprintAnalyzer', level='ERROR'):
            result = FootprintAnalyzer(limits=LimitSet(total=0)).analyze_files([garbage])
        self.assertFalse(result.any_over_limit())

    def test_any_over_limit_restricted_to_metrics(self):
        path = self.write_file('stack.elf', make_binary(10, 1000, stack=900))
        result = FootprintAnalyzer(limits=LimitSet(data=500)).analyze_files([path])
        self.assertTrue(result.any_over_limit())
        self.assertFalse(result.any_over_limit(FIXED_METRICS))
        self.assertTrue(result.any_over_limit(iter([Metric.Data])))

    def test_inconsistent_reservations_warning(self):
        path = self.write_file('stack.elf', make_binary(10, 100, stack=200))
        with self.assertLogs('FootprintAnalyzer', level='WARNING') as logs:
            result = FootprintAnalyzer().analyze_files([path])
        self.assertEqual(len(result.reports), 1)
        self.assertFalse(result.reports[0].summary.reservations_consistent)
        self.assertIn('reservations', logs.output[0])


if __name__ == '__main__':
    import unittest
    unittest.main()
