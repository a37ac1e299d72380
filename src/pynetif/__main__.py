from pynetif.cli import main

raise SystemExit(main())
