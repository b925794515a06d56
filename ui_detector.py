from typing import List

from manifest import Manifest
from project_walker import ProjectSnapshot
from stable_preview import ScanResult

# dependency name -> display name, checked in this order
UI_CATALOG = [
    ("@mui/material", "Material UI"),
    ("@mui/system", "Material UI"),
    ("antd", "Ant Design"),
    ("@chakra-ui/react", "Chakra UI"),
    ("@mantine/core", "Mantine"),
    ("primereact", "PrimeReact"),
    ("@headlessui/react", "Headless UI"),
    ("bootstrap", "Bootstrap React"),
    ("react-bootstrap", "Bootstrap React"),
    ("styled-components", "Styled Components"),
    ("@emotion/react", "Emotion"),
    ("@vanilla-extract/css", "Vanilla Extract"),
    ("tailwindcss", "TailwindCSS"),
    ("daisyui", "DaisyUI"),
    ("flowbite", "Flowbite"),
    ("lucide-react", "Lucide Icons"),
    ("@heroicons/react", "Heroicons"),
    ("recharts", "Recharts"),
    ("zustand", "Zustand (State)"),
]

TAILWIND_CONFIGS = (
    "tailwind.config.js", "tailwind.config.ts", "tailwind.config.cjs", "tailwind.config.mjs",
)
SHADCN_MARKERS = ("components.json", "src/components/ui", "components/ui")


class UIDetector:
    def __init__(self, snapshot: ProjectSnapshot, manifest: Manifest):
        self.snapshot = snapshot
        self.manifest = manifest

    def scan(self) -> ScanResult:
        merged = list(dict.fromkeys(self.detect_basic() + self.detect_advanced()))
        return ScanResult(merged)

    def detect_basic(self) -> List[str]:
        detected = [label for dep, label in UI_CATALOG if self.manifest.has(dep)]

        tailwind = [c for c in TAILWIND_CONFIGS if c in self.snapshot.files]
        if tailwind:
            detected.append("TailwindCSS")
            for config in tailwind:
                content = self.snapshot.read_text(config) or ""
                if "daisyui" in content:
                    detected.append("DaisyUI")
                    break
        return detected

    def detect_advanced(self) -> List[str]:
        detected = []
        if any(self.snapshot.exists(marker) for marker in SHADCN_MARKERS):
            detected.append("Shadcn UI")
        if self.manifest.has_prefix("@radix-ui/"):
            detected.append("Radix UI")
        return detected
