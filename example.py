"""Example usage of the tfs_tables library."""

from pathlib import Path

from tfs_tables import Table, read_tfs, write_tfs

# Build a table column by column
twiss = Table()
twiss.add_column("NAME", ["IP1", "BPM.1", "BPM.2", "IP2"])
twiss.add_column("S", [0.0, 12.5, 25.0, 37.5])
twiss.add_column("BETX", [0.55, 31.2, 44.8, 0.55])
twiss.add_column("TURN", [1, 1, 1, 1])

# Attach properties to the whole table
twiss.insert_property("TITLE", "example optics")
twiss.insert_property("Q1", 62.31)
twiss.insert_property("Q2", 60.32)
twiss.insert_property("NPART", 4)

path = Path("./example.tfs")
write_tfs(twiss, path)
print(f"Wrote {twiss.row_count()} rows to {path}:\n")
print(path.read_text())

# Read it back, indexing rows by element name
loaded = read_tfs(path, index_column="NAME")
print(loaded.describe())

row = loaded.row_of("BPM.2")
betx = loaded.get_column("BETX").as_float_sequence()[row]
print(f"\nBETX at BPM.2 (row {row}): {betx}")
print(f"Q1 = {loaded.get_property('Q1').as_float()}")

print("\n" + "=" * 60)
print("You can inspect the file with the dump tool:")
print(f"  tfs-dump {path}")
print(f"  tfs-dump {path} --index NAME --verify -n 2")
