import requests
import time

BASE_URL = "http://localhost:8001"


def probe_heat():
    print("--- Probing heat build-up on a live server ---")

    # 1. Floor it
    print("Setting throttle to full...")
    requests.post(f"{BASE_URL}/api/player/throttle", json={"throttle": 1})

    # 2. Monitor heat
    print("Monitoring heat...")
    heats = []
    for i in range(5):
        r = requests.get(f"{BASE_URL}/api/pursuit")
        data = r.json()
        print(f"Time {i}: Heat={data['heat']:.1f}, Phase={data['phase']}, Bust={data['bustProgress']:.2f}")
        heats.append(data["heat"])
        time.sleep(1.0)

    if heats == sorted(heats) and len(set(heats)) > 1:
        print("SUCCESS: Heat is accumulating.")
    else:
        print("FAILURE: Heat is static or decreasing.")

    # 3. Pit stop resets heat
    print("Reporting pit stop reached...")
    requests.post(f"{BASE_URL}/api/pitstop/reached")
    time.sleep(0.2)
    data = requests.get(f"{BASE_URL}/api/pursuit").json()
    print(f"After pit stop: Heat={data['heat']:.1f}, Phase={data['phase']}")
    requests.post(f"{BASE_URL}/api/pitstop/continue")


if __name__ == "__main__":
    probe_heat()
