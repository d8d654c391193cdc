import math
import pathlib
import tempfile
import unittest
from datetime import datetime

from digivit.core.models import Sample
from digivit.dataio.csv_writer import append_row, format_row, write_rows
from digivit.dataio.file_paths import log_filename, log_path
from digivit.dataio.log_loader import LogFormatError, load_samples


class FormatRowTest(unittest.TestCase):
    def test_valid_sample(self):
        sample = Sample(index=3, elapsed_s=20.0, raw_counts=3000, position_mm=0.12)
        self.assertEqual(format_row(sample), ["3", "20.00", "3000", "0.12000"])

    def test_negative_and_zero_readings(self):
        self.assertEqual(
            format_row(Sample(1, 0.0, -50000, -2.0)), ["1", "0.00", "-50000", "-2.00000"]
        )
        self.assertEqual(format_row(Sample(2, 0.25, 0, 0.0)), ["2", "0.25", "0", "0.00000"])

    def test_missing_sample(self):
        sample = Sample(index=1, elapsed_s=0.0, raw_counts=math.nan, position_mm=math.nan)
        self.assertEqual(format_row(sample), ["1", "0.00", "NaN", "NaN"])


class FilePathsTest(unittest.TestCase):
    def test_log_filename_uses_run_start(self):
        when = datetime(2023, 10, 5, 14, 3, 9)
        self.assertEqual(log_filename(when), "logged_digiVIT_data_5-Oct-2023_14_03_09.csv")

    def test_log_path_joins_base(self):
        when = datetime(2024, 1, 31, 23, 59, 59)
        path = log_path(pathlib.Path("data"), when)
        self.assertEqual(path, pathlib.Path("data") / "logged_digiVIT_data_31-Jan-2024_23_59_59.csv")


class WriteAndLoadTest(unittest.TestCase):
    def test_append_then_load(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "log.csv"
            append_row(path, Sample(1, 0.0, 1000, 0.04))
            append_row(path, Sample(2, 10.0, math.nan, math.nan))

            self.assertEqual(
                path.read_text(encoding="utf-8").splitlines(),
                ["1,0.00,1000,0.04000", "2,10.00,NaN,NaN"],
            )
            samples = load_samples(path)

        self.assertEqual([s.index for s in samples], [1, 2])
        self.assertEqual(samples[0].raw_counts, 1000)
        self.assertAlmostEqual(samples[0].position_mm, 0.04)
        self.assertEqual(samples[1].elapsed_s, 10.0)
        self.assertTrue(samples[1].is_missing)
        self.assertTrue(math.isnan(samples[1].position_mm))

    def test_write_rows_replaces_content_and_creates_dirs(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "nested" / "log.csv"
            write_rows(path, [Sample(1, 0.0, 5, 0.0002)])
            write_rows(path, [Sample(1, 0.0, 7, 0.00028)])
            self.assertEqual(path.read_text(encoding="utf-8"), "1,0.00,7,0.00028\n")

    def test_load_samples_skips_blank_lines(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "one.csv"
            path.write_text("1,0.00,-5,-0.00020\n\n", encoding="utf-8")
            samples = load_samples(path)
        self.assertEqual(samples, [Sample(1, 0.0, -5, -0.0002)])

    def test_load_samples_rejects_wrong_column_count(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "short.csv"
            path.write_text("1,0.00,5,0.00020\n2,1.00,6\n", encoding="utf-8")
            with self.assertRaises(LogFormatError) as ctx:
                load_samples(path)
        self.assertIn("line 2", str(ctx.exception))

    def test_load_samples_rejects_header_row(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "with_header.csv"
            path.write_text("n,t,counts,mm\n1,0.00,5,0.00020\n", encoding="utf-8")
            with self.assertRaises(LogFormatError):
                load_samples(path)


if __name__ == "__main__":
    unittest.main()
