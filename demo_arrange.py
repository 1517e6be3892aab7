import sys

from parcel_packer.catalog import PackingSession
from parcel_packer.packing import print_arrangement_summary
from parcel_packer.plotter3d import show_arrangement

if __name__ == "__main__":
    session = PackingSession()

    # Built-in presets: "s" 0.5^3, "m" 1^3, "l" 1.5^3
    session.set_quantity("s", 6)
    session.set_quantity("m", 4)
    session.set_quantity("l", 2)

    # A user-defined type gets the next palette color
    shoe_box = session.add_parcel_type("Shoe box", 0.6, 0.3, 0.4)
    session.set_quantity(shoe_box.id, 10)

    # Optional seed on the command line for a reproducible layout;
    # run again without one to try another arrangement
    seed = int(sys.argv[1]) if len(sys.argv) > 1 else None
    result = session.arrange(rng=seed)

    print("=" * 50)
    print_arrangement_summary(session.container, result)

    show_arrangement(session.container, result)
