"""Render a built-in scene from a render job (wrapper around mathraster.cli).

CLI:
    python scripts/render_scene.py --config configs/render_job.v1.yaml
    python scripts/render_scene.py --scene venn --output outputs/venn
"""

import sys

from mathraster.cli import main

if __name__ == "__main__":
    sys.exit(main())
