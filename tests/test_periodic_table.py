import tempfile
import unittest
from pathlib import Path

from chemparse.errors import PeriodicTableError
from chemparse.models import ElementRecord
from chemparse.periodic_table import PeriodicTable

HEADER = "name,symbol,atomic_number,atomic_mass,density,group,melting_point,boiling_point\n"


class TestPeriodicTableCSV(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.directory = Path(self._tmp.name)

    def write(self, body, header=HEADER):
        path = self.directory / "elements.csv"
        path.write_text(header + body, encoding="utf-8")
        return path

    def test_optional_columns(self):
        path = self.write(
            "Hydrogen,H,1,1.008,0.00008988,1,14.01,20.28\n"
            "Cerium,Ce,58,140.12,6.77,,1068,\n"
        )
        table = PeriodicTable.from_csv(path)
        self.assertEqual(len(table), 2)
        self.assertEqual(
            table["H"],
            ElementRecord("Hydrogen", "H", 1, 1.008, 0.00008988, 1, 14.01, 20.28),
        )
        cerium = table.get_element("Ce")
        self.assertIsNone(cerium.group)
        self.assertIsNone(cerium.boiling_point)
        self.assertEqual(cerium.melting_point, 1068.0)
        self.assertIsNone(table.get_element("Xx"))

    def test_missing_file(self):
        with self.assertRaises(PeriodicTableError):
            PeriodicTable.from_csv(self.directory / "missing.csv")

    def test_invalid_encoding(self):
        path = self.directory / "elements.csv"
        path.write_bytes(HEADER.encode() + b"Hydrogen,H,1,1.008,0.1,1,,\n\xff,X,2,2.0,0.1,,,\n")
        with self.assertRaises(PeriodicTableError):
            PeriodicTable.from_csv(path)

    def test_missing_column(self):
        path = self.write("Hydrogen,H,1,1.008\n", header="name,symbol,atomic_number,atomic_mass\n")
        with self.assertRaises(PeriodicTableError):
            PeriodicTable.from_csv(path)

    def test_malformed_number(self):
        path = self.write("Hydrogen,H,one,1.008,0.1,1,,\n")
        with self.assertRaises(PeriodicTableError):
            PeriodicTable.from_csv(path)

    def test_non_positive_mass(self):
        path = self.write("Hydrogen,H,1,0,0.1,1,,\n")
        with self.assertRaises(PeriodicTableError):
            PeriodicTable.from_csv(path)

    def test_duplicate_symbol(self):
        path = self.write("Hydrogen,H,1,1.008,0.1,1,,\nHydrogen,H,1,1.008,0.1,1,,\n")
        with self.assertRaises(PeriodicTableError):
            PeriodicTable.from_csv(path)


class TestBundledTable(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.table = PeriodicTable.default()

    def test_complete(self):
        self.assertEqual(len(self.table), 118)
        numbers = sorted(record.atomic_number for record in self.table.values())
        self.assertEqual(numbers, list(range(1, 119)))

    def test_reference_masses(self):
        self.assertEqual(self.table["H"].atomic_mass, 1.008)
        self.assertEqual(self.table["O"].atomic_mass, 15.999)
        self.assertEqual(self.table["Na"].name, "Sodium")

    def test_symbols_are_case_sensitive(self):
        self.assertIn("Co", self.table)
        self.assertNotIn("CO", self.table)

    def test_read_only(self):
        with self.assertRaises(TypeError):
            self.table["H"] = self.table["He"]

    def test_str(self):
        self.assertEqual(
            str(self.table["H"]), "H (Hydrogen)\nAtomic number: 1\nAtomic mass: 1.008"
        )


if __name__ == '__main__':
    unittest.main()
