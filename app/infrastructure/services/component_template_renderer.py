"""Component source templates: template key → Angular component source (Jinja).

Keys are ComponentCategory values plus BASE; unknown keys fall back to BASE.
Context: component_name, selector, kebab, description, category, imports
(list of {name, path}), category_logic (rendered block).
"""

from __future__ import annotations

import re
from typing import Any

from jinja2 import Environment, StrictUndefined, Template

BASE_TEMPLATE_KEY = "BASE"

_HEADER = (
    "{% for imp in imports %}import { {{ imp.name }} } from './{{ imp.path }}';\n{% endfor %}"
)

_COMPONENT_DECORATOR = (
    "@Component({\n"
    "  selector: '{{ selector }}',\n"
    "  templateUrl: './{{ kebab }}.component.html',\n"
    "  styleUrls: ['./{{ kebab }}.component.scss']\n"
    "})\n"
)

_DEFAULT_TEMPLATES: dict[str, str] = {
    BASE_TEMPLATE_KEY: _HEADER
    + "import { Component, OnInit } from '@angular/core';\n\n"
    "/**\n"
    " * {{ component_name }} Component\n"
    " * {{ description | doc_comment }}\n"
    " * Category: {{ category }}\n"
    " */\n"
    + _COMPONENT_DECORATOR
    + "export class {{ component_name }}Component implements OnInit {\n\n"
    "  category = '{{ category }}';\n\n"
    "{{ category_logic }}\n"
    "  constructor() {\n"
    "    console.log('{{ component_name }} initialized');\n"
    "  }\n\n"
    "  ngOnInit(): void {\n"
    "    this.initialize();\n"
    "  }\n\n"
    "  private initialize(): void {\n"
    "  }\n"
    "}\n",
    "SAFETY_SYSTEM": _HEADER
    + "import { Component, OnInit, Input, Output, EventEmitter } from '@angular/core';\n\n"
    "/**\n"
    " * {{ component_name }} Component - Safety System\n"
    " * {{ description | doc_comment }}\n"
    " *\n"
    " * Handles safety-critical operations in the vehicle.\n"
    " */\n"
    + _COMPONENT_DECORATOR
    + "export class {{ component_name }}Component implements OnInit {\n\n"
    "  @Input() sensorData: any;\n"
    "  @Output() alertTriggered = new EventEmitter<string>();\n\n"
    "  category = '{{ category }}';\n"
    "  safetyStatus: 'NORMAL' | 'WARNING' | 'CRITICAL' = 'NORMAL';\n\n"
    "{{ category_logic }}\n"
    "  constructor() {\n"
    "    console.log('Safety System {{ component_name }} initialized');\n"
    "  }\n\n"
    "  ngOnInit(): void {\n"
    "    this.checkSafetyParameters();\n"
    "  }\n\n"
    "  private checkSafetyParameters(): void {\n"
    "    if (this.sensorData) {\n"
    "      this.evaluateSafetyStatus();\n"
    "    }\n"
    "  }\n\n"
    "  private evaluateSafetyStatus(): void {\n"
    "  }\n\n"
    "  public triggerAlert(message: string): void {\n"
    "    this.alertTriggered.emit(message);\n"
    "  }\n"
    "}\n",
    "ENGINE_MANAGEMENT": _HEADER
    + "import { Component, OnInit, Input } from '@angular/core';\n\n"
    "/**\n"
    " * {{ component_name }} Component - Engine Management\n"
    " * {{ description | doc_comment }}\n"
    " *\n"
    " * Monitors engine parameters and performance.\n"
    " */\n"
    + _COMPONENT_DECORATOR
    + "export class {{ component_name }}Component implements OnInit {\n\n"
    "  @Input() engineData: any;\n\n"
    "  category = '{{ category }}';\n"
    "  rpm: number = 0;\n"
    "  temperature: number = 0;\n"
    "  fuelLevel: number = 100;\n\n"
    "{{ category_logic }}\n"
    "  constructor() {\n"
    "    console.log('Engine Management {{ component_name }} initialized');\n"
    "  }\n\n"
    "  ngOnInit(): void {\n"
    "    this.updateEngineParameters();\n"
    "  }\n\n"
    "  private updateEngineParameters(): void {\n"
    "    if (this.engineData) {\n"
    "      this.rpm = this.engineData.rpm || 0;\n"
    "      this.temperature = this.engineData.temperature || 0;\n"
    "      this.fuelLevel = this.engineData.fuelLevel || 100;\n"
    "    }\n"
    "  }\n\n"
    "  public getEngineStatus(): string {\n"
    "    if (this.temperature > 100) return 'OVERHEATING';\n"
    "    if (this.fuelLevel < 10) return 'LOW_FUEL';\n"
    "    return 'NORMAL';\n"
    "  }\n"
    "}\n",
    "INFOTAINMENT": _HEADER
    + "import { Component, OnInit, Input, Output, EventEmitter } from '@angular/core';\n\n"
    "/**\n"
    " * {{ component_name }} Component - Infotainment\n"
    " * {{ description | doc_comment }}\n"
    " */\n"
    + _COMPONENT_DECORATOR
    + "export class {{ component_name }}Component implements OnInit {\n\n"
    "  @Input() displayMode: 'DAY' | 'NIGHT' = 'DAY';\n"
    "  @Output() modeChanged = new EventEmitter<string>();\n\n"
    "  category = '{{ category }}';\n"
    "  currentMedia: any;\n"
    "  volume: number = 50;\n\n"
    "{{ category_logic }}\n"
    "  constructor() {\n"
    "    console.log('Infotainment {{ component_name }} initialized');\n"
    "  }\n\n"
    "  ngOnInit(): void {\n"
    "    this.applyDisplayMode();\n"
    "  }\n\n"
    "  private applyDisplayMode(): void {\n"
    "  }\n\n"
    "  public changeVolume(newVolume: number): void {\n"
    "    this.volume = Math.max(0, Math.min(100, newVolume));\n"
    "  }\n\n"
    "  public toggleDisplayMode(): void {\n"
    "    this.displayMode = this.displayMode === 'DAY' ? 'NIGHT' : 'DAY';\n"
    "    this.modeChanged.emit(this.displayMode);\n"
    "    this.applyDisplayMode();\n"
    "  }\n"
    "}\n",
    "DIAGNOSTIC": _HEADER
    + "import { Component, OnInit, Output, EventEmitter } from '@angular/core';\n\n"
    "/**\n"
    " * {{ component_name }} Component - Diagnostic\n"
    " * {{ description | doc_comment }}\n"
    " *\n"
    " * Runs diagnostics and manages error codes.\n"
    " */\n"
    + _COMPONENT_DECORATOR
    + "export class {{ component_name }}Component implements OnInit {\n\n"
    "  @Output() diagnosticComplete = new EventEmitter<any>();\n\n"
    "  category = '{{ category }}';\n"
    "  diagnosticCodes: string[] = [];\n"
    "  isRunning: boolean = false;\n\n"
    "{{ category_logic }}\n"
    "  constructor() {\n"
    "    console.log('Diagnostic {{ component_name }} initialized');\n"
    "  }\n\n"
    "  ngOnInit(): void {\n"
    "    this.loadDiagnosticCodes();\n"
    "  }\n\n"
    "  private loadDiagnosticCodes(): void {\n"
    "  }\n\n"
    "  public clearDiagnosticCodes(): void {\n"
    "    this.diagnosticCodes = [];\n"
    "  }\n"
    "}\n",
}

# Extra members injected per category; BASE covers the rest.
_CATEGORY_LOGIC: dict[str, str] = {
    "SAFETY_SYSTEM": (
        "  // Safety system logic\n"
        "  private alertSystem: any;\n\n"
        "  monitorSafety(): void {\n"
        "  }\n"
    ),
    "ENGINE_MANAGEMENT": (
        "  // Engine management logic\n"
        "  private engineSnapshot: any;\n\n"
        "  monitorEngine(): void {\n"
        "  }\n"
    ),
    "INFOTAINMENT": (
        "  // Infotainment logic\n"
        "  private mediaPlayer: any;\n\n"
        "  updateDisplay(): void {\n"
        "  }\n"
    ),
    "DIAGNOSTIC": (
        "  // Diagnostic logic\n"
        "  private dataLogger: any;\n\n"
        "  runDiagnostics(): void {\n"
        "    this.isRunning = true;\n"
        "  }\n"
    ),
    BASE_TEMPLATE_KEY: "  // Component logic\n",
}

_STYLE_TEMPLATE = (
    "/* {{ component_name }} Component Styles */\n\n"
    ":host {\n"
    "  display: block;\n"
    "  padding: 16px;\n"
    "}\n\n"
    ".component-container {\n"
    "  background-color: #ffffff;\n"
    "  border-radius: 8px;\n"
    "  box-shadow: 0 2px 4px rgba(0, 0, 0, 0.1);\n"
    "}\n\n"
    ".component-header {\n"
    "  font-size: 18px;\n"
    "  font-weight: 600;\n"
    "  margin-bottom: 16px;\n"
    "  color: #333;\n"
    "}\n\n"
    ".component-content {\n"
    "  padding: 16px;\n"
    "}\n"
)

_TEST_TEMPLATE = (
    "import { ComponentFixture, TestBed } from '@angular/core/testing';\n"
    "import { {{ component_name }}Component } from './{{ kebab }}.component';\n\n"
    "describe('{{ component_name }}Component', () => {\n"
    "  let component: {{ component_name }}Component;\n"
    "  let fixture: ComponentFixture<{{ component_name }}Component>;\n\n"
    "  beforeEach(async () => {\n"
    "    await TestBed.configureTestingModule({\n"
    "      declarations: [ {{ component_name }}Component ]\n"
    "    })\n"
    "    .compileComponents();\n\n"
    "    fixture = TestBed.createComponent({{ component_name }}Component);\n"
    "    component = fixture.componentInstance;\n"
    "    fixture.detectChanges();\n"
    "  });\n\n"
    "  it('should create', () => {\n"
    "    expect(component).toBeTruthy();\n"
    "  });\n\n"
    "  it('should initialize with correct category', () => {\n"
    "    expect(component.category).toBe('{{ category }}');\n"
    "  });\n"
    "});\n"
)

_INPUT_RE = re.compile(r"@Input\(\)\s+(\w+)")
_OUTPUT_RE = re.compile(r"@Output\(\)\s+(\w+)")


def doc_comment(text: str | None) -> str:
    """Make text safe inside a /** ... */ block: no early terminator, one ' * ' per line."""
    if not text:
        return ""
    return text.replace("*/", "* /").replace("\r\n", "\n").replace("\n", "\n * ")


class ComponentTemplateRenderer:
    """Renders component, style and test source for a template key."""

    def __init__(self, templates: dict[str, str] | None = None) -> None:
        """Initialize with optional template dict; falls back to _DEFAULT_TEMPLATES."""
        self._templates = templates or _DEFAULT_TEMPLATES
        if BASE_TEMPLATE_KEY not in self._templates:
            raise ValueError(f"Template set must define {BASE_TEMPLATE_KEY}")
        self._env = Environment(
            autoescape=False, keep_trailing_newline=True, undefined=StrictUndefined
        )
        self._env.filters["doc_comment"] = doc_comment
        self._compiled: dict[str, Template] = {
            key: self._env.from_string(src) for key, src in self._templates.items()
        }
        self._style = self._env.from_string(_STYLE_TEMPLATE)
        self._test = self._env.from_string(_TEST_TEMPLATE)

    def has_template(self, key: str) -> bool:
        return key in self._compiled

    def resolve_key(self, *candidates: str | None) -> str:
        """Return the first candidate with a template, else BASE."""
        for key in candidates:
            if key and key in self._compiled:
                return key
        return BASE_TEMPLATE_KEY

    def category_logic(self, category: str) -> str:
        return _CATEGORY_LOGIC.get(category, _CATEGORY_LOGIC[BASE_TEMPLATE_KEY])

    def render_component(self, template_key: str, context: dict[str, Any]) -> str:
        """Render component source. Raises KeyError if key unknown."""
        if template_key not in self._compiled:
            raise KeyError(f"Unknown component template: {template_key}")
        ctx = dict(context)
        ctx.setdefault("category_logic", self.category_logic(ctx["category"]))
        return self._compiled[template_key].render(**ctx)

    def render_style(self, context: dict[str, Any]) -> str:
        return self._style.render(**context)

    def render_test(self, context: dict[str, Any]) -> str:
        return self._test.render(**context)

    @staticmethod
    def extract_ports(source: str) -> tuple[list[str], list[str]]:
        """Return (inputs, outputs) declared with @Input()/@Output() in source."""
        return _INPUT_RE.findall(source), _OUTPUT_RE.findall(source)
