from typing import Dict, Optional

from manifest import Manifest
from project_walker import ProjectSnapshot

UNKNOWN = "Unknown"
UNKNOWN_BACKEND = "Unknown Backend"
CUSTOM_BACKEND = "Node (Custom Backend)"


class FrameworkDetector:
    """
    Manifest-driven framework identification.

    Frontend checks run in priority order (Next.js before React before the
    rest); backend checks pair a dependency with a companion file where one
    is conventional. The overall label prefers the frontend framework.
    """

    def __init__(self, snapshot: ProjectSnapshot, manifest: Manifest):
        self.snapshot = snapshot
        self.manifest = manifest

    def detect(self) -> Dict[str, str]:
        frontend = self.detect_frontend()
        backend = self.detect_backend()
        label = frontend
        if frontend == UNKNOWN and backend not in (UNKNOWN_BACKEND, CUSTOM_BACKEND):
            label = backend
        return {
            "framework": label,
            "frontend": frontend,
            "backend": backend,
            "bundler": self.detect_bundler(),
        }

    def detect_frontend(self) -> str:
        deps = self.manifest.dependencies
        snap = self.snapshot
        if not self.manifest.found:
            return UNKNOWN

        if "next" in deps:
            if snap.is_dir("app"):
                return "Next.js (App Router)"
            if snap.is_dir("pages"):
                return "Next.js (Pages Router)"
            return "Next.js"

        if "react" in deps and "react-dom" in deps and "react-scripts" in deps:
            if snap.exists("public/index.html") or snap.exists("src/index.js"):
                return "React (CRA)"

        has_vite = snap.exists("vite.config.js") or snap.exists("vite.config.ts")
        if has_vite and ("react" in deps or "@vitejs/plugin-react" in deps):
            return "React (Vite)"

        if has_vite and ("vue" in deps or "@vitejs/plugin-vue" in self.manifest.dev_dependencies):
            return "Vue 3 (Vite)"

        if "@sveltejs/kit" in deps or snap.exists("svelte.config.js"):
            return "SvelteKit"

        if "react" in deps and "react-dom" in deps:
            return "React"

        return UNKNOWN

    def detect_backend(self) -> str:
        has = self.manifest.has

        if has("express") and self._find_file(["app.js", "server.js", "index.js"]):
            return "Express"
        if has("fastify"):
            return "Fastify"
        if (has("@nestjs/common") or has("@nestjs/core")) and self._find_file(["main.ts", "app.module.ts"]):
            return "NestJS"
        if has("hono"):
            return "Hono"
        if has("koa"):
            return "Koa"

        if self.snapshot.is_dir("controllers") or self.snapshot.is_dir("routes"):
            return CUSTOM_BACKEND
        return UNKNOWN_BACKEND

    def detect_bundler(self) -> str:
        for filename, name in (("vite.config.js", "Vite"), ("vite.config.ts", "Vite"),
                               ("webpack.config.js", "Webpack"), ("rollup.config.js", "Rollup")):
            if self.snapshot.exists(filename):
                return name
        return UNKNOWN

    def _find_file(self, names) -> Optional[str]:
        for rel in self.snapshot.files:
            if rel.rsplit("/", 1)[-1] in names:
                return rel
        return None


def framework_badge(framework: str) -> str:
    if "Next" in framework:
        return "⚡ Next.js"
    if "React" in framework:
        return "⚛️ React"
    if "Vite" in framework:
        return "⚡ Vite"
    if "Vue" in framework:
        return "🟩 Vue"
    if "Svelte" in framework:
        return "🔥 SvelteKit"
    return "📦 Unknown"
