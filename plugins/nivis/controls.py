"""
Control panel widgets for the nivis viewer.

Dark-themed sliders and buttons drawn directly with pygame. Sliders and
button rows are created from parameter bindings, so the panel never
touches the parameter store itself; it only calls binding getters and
setters.
"""

import pygame

from .errors import MissingBoundElement
from .parameters import ChoiceBinding, NumericBinding


THEME = {
    "bg": (18, 18, 24),
    "panel": (25, 25, 35),
    "track": (50, 50, 65),
    "track_fill": (120, 180, 230),
    "handle": (200, 210, 230),
    "handle_active": (255, 255, 255),
    "text": (180, 185, 195),
    "text_bright": (230, 235, 245),
    "text_dim": (100, 105, 115),
    "button": (40, 42, 55),
    "button_hover": (55, 58, 75),
    "button_active": (60, 110, 170),
    "divider": (40, 40, 55),
    "error": (230, 90, 80),
}


class Slider:
    """Horizontal slider bound to a numeric parameter."""

    height = 36

    def __init__(self, x, y, width, binding):
        self.x = x
        self.y = y
        self.width = width
        self.binding = binding
        self.value = binding.get()
        self.dragging = False
        self.hovered = False

        self.track_y = self.y + 22
        self.track_h = 4
        self.handle_r = 7
        self.track_x = self.x + 8
        self.track_w = self.width - 16

    def _val_to_x(self, val):
        b = self.binding
        frac = (val - b.min) / (b.max - b.min)
        return self.track_x + frac * self.track_w

    def _x_to_val(self, px):
        b = self.binding
        frac = max(0.0, min(1.0, (px - self.track_x) / self.track_w))
        val = b.min + frac * (b.max - b.min)
        if b.step:
            val = round(val / b.step) * b.step
        return max(b.min, min(b.max, val))

    def _drag_to(self, px):
        self.binding.set(self._x_to_val(px))
        self.value = self.binding.get()

    def handle_event(self, event):
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            mx, my = event.pos
            if (self.track_x - 4 <= mx <= self.track_x + self.track_w + 4 and
                    abs(my - self.track_y) <= 12):
                self.dragging = True
                self._drag_to(mx)
                return True

        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.dragging = False

        elif event.type == pygame.MOUSEMOTION:
            mx, my = event.pos
            hx = self._val_to_x(self.value)
            self.hovered = abs(mx - hx) < 12 and abs(my - self.track_y) < 12
            if self.dragging:
                self._drag_to(mx)
                return True

        return False

    def sync(self):
        if not self.dragging:
            self.value = self.binding.get()

    def draw(self, surface, font):
        b = self.binding
        surface.blit(font.render(b.label, True, THEME["text"]), (self.x + 8, self.y + 2))
        val_surf = font.render(f"{self.value:{b.fmt}}", True, THEME["text_bright"])
        surface.blit(val_surf, (self.x + self.width - val_surf.get_width() - 8, self.y + 2))

        top = self.track_y - self.track_h // 2
        pygame.draw.rect(surface, THEME["track"],
                         pygame.Rect(self.track_x, top, self.track_w, self.track_h),
                         border_radius=2)
        hx = self._val_to_x(self.value)
        pygame.draw.rect(surface, THEME["track_fill"],
                         pygame.Rect(self.track_x, top, hx - self.track_x, self.track_h),
                         border_radius=2)

        active = self.dragging or self.hovered
        color = THEME["handle_active"] if active else THEME["handle"]
        pygame.draw.circle(surface, color, (int(hx), self.track_y),
                           self.handle_r + (2 if self.dragging else 0))


class Button:
    """Clickable button. label may be changed at any time."""

    def __init__(self, x, y, width, height, label, on_click=None, active=False):
        self.rect = pygame.Rect(x, y, width, height)
        self.label = label
        self.on_click = on_click
        self.active = active
        self.hovered = False

    def handle_event(self, event):
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                if self.on_click:
                    self.on_click()
                return True
        elif event.type == pygame.MOUSEMOTION:
            self.hovered = self.rect.collidepoint(event.pos)
        return False

    def sync(self):
        pass

    def draw(self, surface, font):
        if self.active:
            color = THEME["button_active"]
        elif self.hovered:
            color = THEME["button_hover"]
        else:
            color = THEME["button"]
        pygame.draw.rect(surface, color, self.rect, border_radius=4)

        label_surf = font.render(self.label, True, THEME["text_bright"])
        surface.blit(label_surf, label_surf.get_rect(center=self.rect.center))


class ChoiceRow:
    """Row of radio buttons bound to an enumerated parameter."""

    def __init__(self, x, y, width, binding, btn_height=26):
        self.binding = binding
        self.buttons = []
        padding = 4
        count = max(1, len(binding.options))
        bw = (width - padding * (count - 1)) // count
        for i, option in enumerate(binding.options):
            label = getattr(option, "label", str(option))
            self.buttons.append(Button(x + i * (bw + padding), y, bw, btn_height, label))
        self.total_height = btn_height
        self.sync()

    def sync(self):
        current = self.binding.get()
        for option, btn in zip(self.binding.options, self.buttons):
            btn.active = option == current

    def handle_event(self, event):
        for option, btn in zip(self.binding.options, self.buttons):
            if btn.handle_event(event):
                self.binding.set(option)
                self.sync()
                return True
        return False

    def draw(self, surface, font):
        for btn in self.buttons:
            btn.draw(surface, font)


class SectionHeader:
    """Section divider with title."""

    height = 24

    def __init__(self, x, y, width, title):
        self.x = x
        self.y = y
        self.width = width
        self.title = title

    def sync(self):
        pass

    def draw(self, surface, font):
        pygame.draw.line(surface, THEME["divider"],
                         (self.x + 8, self.y + 8), (self.x + self.width - 8, self.y + 8))
        surface.blit(font.render(self.title, True, THEME["text_dim"]), (self.x + 8, self.y + 12))


class ControlPanel:
    """
    Side panel holding the widgets. Widgets are stacked top to bottom
    in the order they are added.
    """

    def __init__(self, x, y, width, height):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.widgets = []
        self.surface = pygame.Surface((width, height))
        self._cursor_y = 8

    def add_section(self, title):
        header = SectionHeader(0, self._cursor_y, self.width, title)
        self.widgets.append(header)
        self._cursor_y += header.height + 4

    def add_binding(self, binding):
        """Add the widget matching a parameter binding and return it."""
        if isinstance(binding, NumericBinding):
            widget = Slider(0, self._cursor_y, self.width, binding)
            self._cursor_y += widget.height + 6
        elif isinstance(binding, ChoiceBinding):
            self.add_section(binding.label.upper())
            widget = ChoiceRow(8, self._cursor_y, self.width - 16, binding)
            self._cursor_y += widget.total_height + 8
        else:
            raise MissingBoundElement(f"cannot build a control for {binding!r}")
        self.widgets.append(widget)
        return widget

    def add_button(self, label, on_click=None, width=None):
        bw = width or (self.width - 16)
        btn = Button(8, self._cursor_y, bw, 28, label, on_click)
        self.widgets.append(btn)
        self._cursor_y += 36
        return btn

    def sync(self):
        """Refresh widget state from their bindings (e.g. after a key press)."""
        for widget in self.widgets:
            widget.sync()

    def handle_event(self, event):
        """Process events, translating window coordinates to panel-local ones."""
        if hasattr(event, "pos"):
            local_pos = (event.pos[0] - self.x, event.pos[1] - self.y)
            if not (0 <= local_pos[0] <= self.width and 0 <= local_pos[1] <= self.height):
                # Releasing outside the panel still ends a slider drag
                if event.type == pygame.MOUSEBUTTONUP:
                    for widget in self.widgets:
                        if hasattr(widget, "dragging"):
                            widget.dragging = False
                return False
            attrs = {k: v for k, v in event.__dict__.items() if k != "pos"}
            attrs["pos"] = local_pos
            event = pygame.event.Event(event.type, attrs)

        for widget in self.widgets:
            if hasattr(widget, "handle_event") and widget.handle_event(event):
                return True
        return False

    def draw(self, target_surface, font):
        self.surface.fill(THEME["panel"])
        pygame.draw.line(self.surface, THEME["divider"], (0, 0), (0, self.height))
        for widget in self.widgets:
            widget.draw(self.surface, font)
        target_surface.blit(self.surface, (self.x, self.y))
