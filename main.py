"""
Color Filter MCP Server - FastAPI implementation
Provides endpoints that convert CSS colors to CSS filter chains
"""

import logging
import sys
from pathlib import Path
from fastapi import FastAPI
import uvicorn
from fastapi_mcp import FastApiMCP

# Ensure project root is on sys.path for package imports
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.append(str(project_root))

# Routers
from routers import filterTools_router

app = FastAPI(
    title="Color Filter MCP Server",
    description="A FastAPI server that recolors monochrome assets with CSS filters",
    version="1.0.0"
)

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}

app.include_router(filterTools_router)

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    mcp = FastApiMCP(app, exclude_operations=[])
    mcp.mount_http()
    uvicorn.run(app, host="0.0.0.0", port=8973)
