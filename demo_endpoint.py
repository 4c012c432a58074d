"""
Quick demo script to run the PlantPal API locally.

Starts a local server and shows how to make requests to the endpoints.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting PlantPal Backend Demo")
    print("=" * 60)
    print()
    print("📌 API Endpoints:")
    print("   - Health Check:     GET  http://localhost:8000/health")
    print("   - Form Options:     GET  http://localhost:8000/recommendations/options")
    print("   - Recommendations:  POST http://localhost:8000/recommendations/query")
    print("   - Plant Images:     POST http://localhost:8000/recommendations/images")
    print("   - Own API Key:      PUT  http://localhost:8000/credentials/api-key")
    print("   - API Docs:              http://localhost:8000/docs")
    print()
    print("📝 Test with curl:")
    print('   curl -X POST "http://localhost:8000/recommendations/query" \\')
    print('     -H "Content-Type: application/json" \\')
    print("     -d '{\"location\": {\"latitude\": 40.71, \"longitude\": -74.0},")
    print("          \"environment\": {\"temperature_c\": 21, \"relative_humidity\": 60, \"weather_code\": 2},")
    print("          \"preferences\": {\"sunlight_exposure\": \"Full Sun (6+ hours direct sun)\",")
    print("                          \"sunlight_hours\": 6, \"watering_frequency\": \"Weekly\",")
    print("                          \"planting_area_size\": \"Medium (10-50 sq ft / 1-5 sq m)\"}}'")
    print()
    print("=" * 60)
    print("Starting server on http://localhost:8000")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "plantpal.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
