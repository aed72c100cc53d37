from door_opener.main import main

raise SystemExit(main())
