from __future__ import annotations

from abacus_client.action import main

if __name__ == "__main__":
    main()
