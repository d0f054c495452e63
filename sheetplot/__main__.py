from sheetplot.cli import main

raise SystemExit(main())
