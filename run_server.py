"""
Local development server for the Invoice Assistant backend.

Starts uvicorn with auto-reload and prints the available endpoints.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting Invoice Assistant Backend")
    print("=" * 60)
    print()
    print("📌 API Endpoints:")
    print("   - Health Check:  GET  http://localhost:8000/health")
    print("   - Invoices:      GET  http://localhost:8000/api/invoices[?id=INV-1]")
    print("   - Chat:          POST http://localhost:8000/api/chat")
    print("   - Tools:         GET  http://localhost:8000/api/tools")
    print("   - Connect QBO:   GET  http://localhost:8000/api/auth/connect")
    print("   - API Docs:           http://localhost:8000/docs")
    print()
    print("📝 Test with curl:")
    print('   curl -N -X POST "http://localhost:8000/api/chat" \\')
    print('     -H "Content-Type: application/json" \\')
    print('     -d \'{"messages": [{"role": "user", "content": "show me invoice 2"}]}\'')
    print()
    print("Until QuickBooks is connected, the demo invoice dataset is served.")
    print("=" * 60)
    print()

    uvicorn.run(
        "invoice_assistant.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
