from gitinfo.cli import main

raise SystemExit(main())
