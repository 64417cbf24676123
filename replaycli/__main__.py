from replaycli.cli import main

raise SystemExit(main())
