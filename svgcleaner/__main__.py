from svgcleaner.cli import main

raise SystemExit(main())
