from ppmtrace.render.config import RenderConfig, RenderMethod
from ppmtrace.render.renderer import Renderer, render, render_to_file

__all__ = ["RenderConfig", "RenderMethod", "Renderer", "render", "render_to_file"]
