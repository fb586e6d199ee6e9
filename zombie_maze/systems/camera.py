import pygame

from zombie_maze.config import HEIGHT, WIDTH


class Camera:
    """Follows the player; clamps to the level so no void shows past the walls."""

    def __init__(self, view_w: int = WIDTH, view_h: int = HEIGHT):
        self.x = 0.0
        self.y = 0.0
        self.view_w = view_w
        self.view_h = view_h
        self.lerp = 0.12

    def update(self, target_rect: pygame.Rect, world_rect: pygame.Rect, snap: bool = False):
        tx = target_rect.centerx - self.view_w / 2
        ty = target_rect.centery - self.view_h / 2
        # Levels smaller than the view stay pinned to the origin
        tx = max(0, min(tx, world_rect.width - self.view_w))
        ty = max(0, min(ty, world_rect.height - self.view_h))
        if snap:
            self.x, self.y = tx, ty
        else:
            self.x += (tx - self.x) * self.lerp
            self.y += (ty - self.y) * self.lerp

    def to_screen_rect(self, r: pygame.Rect) -> pygame.Rect:
        return pygame.Rect(int(r.x - self.x), int(r.y - self.y), r.w, r.h)
