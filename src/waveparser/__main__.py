from waveparser.cli import main

raise SystemExit(main())
