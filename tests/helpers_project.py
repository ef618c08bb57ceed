"""Helpers that write synthetic SharePoint Framework projects for tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

GENERATOR_KEY = "@microsoft/generator-sharepoint"
SCHEMA_BASE = "https://dev.office.com/json-schemas/spfx-build/"

WEB_PART_SOURCE = "\n".join(
    [
        "import { Version } from '@microsoft/sp-core-library';",
        "import {",
        "  BaseClientSideWebPart,",
        "  IPropertyPaneConfiguration,",
        "  PropertyPaneTextField",
        "} from '@microsoft/sp-webpart-base';",
        "",
        "export default class HelloWorldWebPart extends BaseClientSideWebPart<{}> {",
        "  public render(): void {",
        "    this.domElement.innerHTML = `<div>Hello</div>`;",
        "  }",
        "",
        "  protected get dataVersion(): Version {",
        "    return Version.parse('1.0');",
        "  }",
        "",
        "  protected getPropertyPaneConfiguration(): IPropertyPaneConfiguration {",
        "    return { pages: [] };",
        "  }",
        "}",
        "",
    ]
)

GRAPH_SOURCE = "\n".join(
    [
        "import { MSGraphClient } from '@microsoft/sp-client-preview';",
        "import { WebPartContext } from '@microsoft/sp-webpart-base';",
        "",
        "export class GraphService {",
        "  public constructor(private context: WebPartContext) {}",
        "",
        "  public getClient(): MSGraphClient {",
        "    return this.context.serviceScope.consume(MSGraphClient.serviceKey);",
        "  }",
        "}",
        "",
        "// new AadHttpClient( is not used by this service",
        "",
    ]
)

GULPFILE = "\n".join(
    [
        "'use strict';",
        "",
        "const gulp = require('gulp');",
        "const build = require('@microsoft/sp-build-web');",
        "",
        "build.initialize(gulp);",
        "",
    ]
)


def write_file(root: Path, rel_path: str, content: str) -> None:
    target = root / rel_path
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")


def write_json(root: Path, rel_path: str, data: Any) -> None:
    write_file(root, rel_path, json.dumps(data, indent=2) + "\n")


def write_spfx_project(
    tmp_path: Path,
    version: str,
    *,
    name: str | None = None,
    graph_client: bool = False,
) -> Path:
    """Write a single web part project generated with ``version``."""
    root = tmp_path / (name or f"spfx-{version.replace('.', '')}")
    root.mkdir(parents=True)

    dependencies = {
        "@microsoft/sp-core-library": version,
        "@microsoft/sp-lodash-subset": version,
        "@microsoft/sp-office-ui-fabric-core": version,
        "@microsoft/sp-webpart-base": version,
        "@types/webpack-env": "1.13.1",
        "@types/es6-promise": "0.0.33",
    }
    if graph_client:
        dependencies["@microsoft/sp-client-preview"] = "0.2.0"

    write_json(
        root,
        "package.json",
        {
            "name": root.name,
            "version": "0.0.1",
            "private": True,
            "scripts": {"build": "gulp bundle", "test": "gulp test"},
            "dependencies": dependencies,
            "devDependencies": {
                "@microsoft/sp-build-web": version,
                "@microsoft/sp-module-interfaces": version,
                "@microsoft/sp-webpart-workbench": version,
                "gulp": "~3.9.1",
                "@types/chai": ">=3.4.34 <3.6.0",
                "@types/mocha": ">=2.2.33 <2.6.0",
            },
        },
    )
    write_json(
        root,
        ".yo-rc.json",
        {
            GENERATOR_KEY: {
                "version": version,
                "libraryName": root.name,
                "libraryId": "dc6a6d4c-1b40-4d55-9b5a-0f1c1f0d7b1e",
                "environment": "spo",
                "isCreatingSolution": True,
                "packageManager": "npm",
                "componentType": "webpart",
            }
        },
    )
    write_json(
        root,
        "config/config.json",
        {
            "$schema": f"{SCHEMA_BASE}config.2.0.schema.json",
            "version": "2.0",
            "bundles": {
                "hello-world-web-part": {
                    "components": [
                        {
                            "entrypoint": "./lib/webparts/helloWorld/HelloWorldWebPart.js",
                            "manifest": "./src/webparts/helloWorld/HelloWorldWebPart.manifest.json",
                        }
                    ]
                }
            },
            "localizedResources": {
                "HelloWorldWebPartStrings": "lib/webparts/helloWorld/loc/{locale}.js"
            },
        },
    )
    write_json(
        root,
        "config/package-solution.json",
        {
            "$schema": f"{SCHEMA_BASE}package-solution.schema.json",
            "solution": {
                "name": f"{root.name}-client-side-solution",
                "id": "6c1c4f8e-2d7b-4a43-9b6f-3b0d4f8c1a2e",
                "version": "1.0.0.0",
                "includeClientSideAssets": True,
            },
            "paths": {"zippedPackage": f"solution/{root.name}.sppkg"},
        },
    )
    write_json(
        root,
        "config/tslint.json",
        {
            "$schema": f"{SCHEMA_BASE}tslint.schema.json",
            "displayAsWarning": True,
            "lintConfig": {"rules": {"class-name": False, "no-unused-imports": True}},
        },
    )
    write_json(
        root,
        "tsconfig.json",
        {
            "compilerOptions": {
                "target": "es5",
                "module": "commonjs",
                "jsx": "react",
                "declaration": True,
                "sourceMap": True,
                "experimentalDecorators": True,
                "skipLibCheck": True,
                "typeRoots": ["./node_modules/@types", "./node_modules/@microsoft"],
                "types": ["es6-promise", "webpack-env"],
                "lib": ["es5", "dom", "es2015.collection"],
            }
        },
    )
    write_file(root, "gulpfile.js", GULPFILE)
    write_file(
        root,
        "src/webparts/helloWorld/HelloWorldWebPart.manifest.json",
        "\n".join(
            [
                "// Generated by the SharePoint Framework Yeoman generator",
                json.dumps(
                    {
                        "$schema": "https://dev.office.com/json-schemas/spfx/client-side-web-part-manifest.schema.json",
                        "id": "4c6e5f3a-8a27-4b43-9a6e-0e6c1c5b9d2f",
                        "alias": "HelloWorldWebPart",
                        "componentType": "WebPart",
                        "version": "*",
                        "manifestVersion": 2,
                        "preconfiguredEntries": [
                            {"groupId": "5c03119e-3074-46fd-976b-c60198311f70", "title": {"default": "HelloWorld"}}
                        ],
                    },
                    indent=2,
                ),
                "",
            ]
        ),
    )
    write_file(root, "src/webparts/helloWorld/HelloWorldWebPart.ts", WEB_PART_SOURCE)
    if graph_client:
        write_file(root, "src/webparts/helloWorld/GraphService.ts", GRAPH_SOURCE)
    return root


def write_spfx_100_project(tmp_path: Path) -> Path:
    """Write a 1.0.0 project without .yo-rc.json."""
    root = tmp_path / "spfx-100"
    root.mkdir(parents=True)
    write_json(
        root,
        "package.json",
        {
            "name": "spfx-100",
            "version": "0.0.1",
            "dependencies": {
                "@microsoft/sp-client-base": "~1.0.0",
                "@microsoft/sp-core-library": "~1.0.0",
                "@microsoft/sp-webpart-base": "~1.0.0",
                "@types/webpack-env": ">=1.12.1 <1.14.0",
            },
            "devDependencies": {
                "@microsoft/sp-build-web": "~1.0.0",
                "@microsoft/sp-module-interfaces": "~1.0.0",
                "@microsoft/sp-webpart-workbench": "~1.0.0",
                "gulp": "~3.9.1",
            },
        },
    )
    write_json(
        root,
        "config/config.json",
        {
            "entries": [
                {
                    "entry": "./lib/webparts/helloWorld/HelloWorldWebPart.js",
                    "manifest": "./src/webparts/helloWorld/HelloWorldWebPart.manifest.json",
                    "outputPath": "./dist/hello-world.bundle.js",
                }
            ],
            "externals": {},
            "localizedResources": {"helloWorldStrings": "webparts/helloWorld/loc/{locale}.js"},
        },
    )
    write_file(root, "gulpfile.js", GULPFILE)
    return root
