from buildinfo.cli import main

raise SystemExit(main())
