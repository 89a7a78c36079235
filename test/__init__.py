import logging
import unittest
import unittest.case
import time

from elfmem.core.segment import Segment, SegmentKind
from elfmem.core.footprint import FootprintSummary
from elfmem.tools import format_eng_unit

__elfmem__ = True  # we need something to know if we loaded elfmem "test" module or something else (such as python "test" module)
logger = logging.getLogger('unittest')


class ElfMemTestResult(unittest.TextTestResult):

    def startTest(self, test):
        setattr(test, '_elfmem_test_start_time', time.perf_counter())
        super().startTest(test)

    def getDescription(self, test):
        return str(test)

    def _write_status(self, test, status):
        # Same as TextTestResult with the test duration added
        is_subtest = isinstance(test, unittest.case._SubTest)
        if is_subtest or self._newline:
            if not self._newline:
                self.stream.writeln()
            if is_subtest:
                self.stream.write("  ")
            self.stream.write(self.getDescription(test))
            self.stream.write(" ... ")
        duration = None
        start_time = getattr(test, '_elfmem_test_start_time', None)
        if isinstance(start_time, float):
            duration = time.perf_counter() - start_time
        self.stream.write(status)
        if duration is not None:
            if duration < 1:
                duration_str = format_eng_unit(duration, decimal=1, unit="s", binary=False)  # handle ms, us, ns
            else:
                duration_str = f"{duration:0.1f}s"
            self.stream.write(f" ({duration_str})")
        self.stream.writeln()
        self.stream.flush()
        self._newline = True


class ElfMemRunner(unittest.TextTestRunner):
    resultclass = ElfMemTestResult


class ElfMemUnitTest(unittest.TestCase):

    def assert_segment(self, segment: Segment, kind: SegmentKind, file_bytes: int, padding_bytes: int, start_address=None):
        self.assertIsInstance(segment, Segment)
        self.assertEqual(segment.kind, kind)
        self.assertEqual(segment.file_bytes, file_bytes)
        self.assertEqual(segment.padding_bytes, padding_bytes)
        self.assertEqual(segment.memory_size, file_bytes + padding_bytes)
        if start_address is not None:
            self.assertEqual(segment.start_address, start_address)

    def assert_summary_consistent(self, summary: FootprintSummary):
        dynamic = summary.dynamic_bytes
        self.assertEqual(dynamic is None, summary.stack_bytes is None and summary.heap_bytes is None)
        self.assertEqual(summary.fixed_data_bytes + (dynamic or 0), summary.data_bytes_total)
        self.assertEqual(summary.total_bytes, summary.instruction_bytes + summary.data_bytes_total)
        self.assertEqual(summary.total_fixed_bytes, summary.instruction_bytes + summary.fixed_data_bytes)
